"""
Tests for parsing the binding configuration and list queries.
"""

import pytest
from pydantic import ValidationError

from ossbinding.config import OSSMetadata, parse_list_query, parse_metadata
from ossbinding.constants import DEFAULT_MAX_KEYS, STORAGE_TARGET_OSS
from ossbinding.error import ParseError, QueryParseError

pytestmark = pytest.mark.unit


class TestParseMetadata:
    """Tests for parse_metadata."""

    def test_recognized_properties(self):
        meta = parse_metadata({
            "endpoint": "oss-cn-hangzhou.aliyuncs.com",
            "accessKeyID": "LTAI-id",
            "accessKey": "secret",
            "bucket": "test",
        })

        assert meta.endpoint == "oss-cn-hangzhou.aliyuncs.com"
        assert meta.access_key_id == "LTAI-id"
        assert meta.access_key == "secret"
        assert meta.bucket == "test"

    def test_property_names_are_case_insensitive(self):
        meta = parse_metadata({"AccessKey": "key", "Endpoint": "endpoint", "AccessKeyID": "accessKeyID", "Bucket": "test"})

        assert meta.access_key == "key"
        assert meta.endpoint == "endpoint"
        assert meta.access_key_id == "accessKeyID"
        assert meta.bucket == "test"

    def test_exact_name_wins_over_case_insensitive_match(self):
        meta = parse_metadata({"BUCKET": "other", "bucket": "test"})
        assert meta.bucket == "test"

        meta = parse_metadata({"bucket": "test", "BUCKET": "other"})
        assert meta.bucket == "test"

    def test_missing_properties_are_empty(self):
        meta = parse_metadata({"bucket": "test"})

        assert meta.endpoint == ""
        assert meta.access_key_id == ""
        assert meta.access_key == ""
        assert meta.region is None
        assert meta.target == STORAGE_TARGET_OSS

    def test_unknown_properties_are_ignored(self):
        meta = parse_metadata({"bucket": "test", "storageClass": "IA", "timeout": "30"})
        assert meta == OSSMetadata(bucket="test")

    def test_python_field_names_are_ignored(self):
        meta = parse_metadata({"access_key": "s", "ACCESS_KEY_ID": "i", "base_dir": "/tmp"})

        assert meta.access_key == ""
        assert meta.access_key_id == ""
        assert meta.base_dir == ""

    def test_none_yields_defaults(self):
        assert parse_metadata(None) == OSSMetadata()

    def test_optional_properties(self):
        meta = parse_metadata({"region": "oss-cn-hangzhou", "target": "local", "baseDir": "/tmp/oss"})

        assert meta.region == "oss-cn-hangzhou"
        assert meta.target == "local"
        assert meta.base_dir == "/tmp/oss"

    def test_non_string_value(self):
        with pytest.raises(ParseError):
            parse_metadata({"bucket": 5})

    def test_not_a_mapping(self):
        with pytest.raises(ParseError):
            parse_metadata(["endpoint", "bucket"])

    def test_metadata_is_immutable(self):
        meta = parse_metadata({"bucket": "test"})
        with pytest.raises(ValidationError):
            meta.bucket = "other"


class TestParseListQuery:
    """Tests for parse_list_query."""

    def test_all_fields(self):
        query = parse_list_query(b'{"marker": "logs/a", "prefix": "logs/", "maxkeys": 2, "delimiter": "/"}')

        assert query.marker == "logs/a"
        assert query.prefix == "logs/"
        assert query.max_keys == 2
        assert query.delimiter == "/"

    def test_zero_max_keys_uses_default(self):
        assert parse_list_query(b'{"maxkeys": 0}').max_keys == DEFAULT_MAX_KEYS
        assert parse_list_query(b'{"maxkeys": 0}') == parse_list_query(b'{"maxkeys": 1000}')

    def test_missing_max_keys_uses_default(self):
        assert parse_list_query(b'{"prefix": "logs/"}').max_keys == DEFAULT_MAX_KEYS

    def test_python_field_name_is_ignored(self):
        assert parse_list_query(b'{"max_keys": 5}').max_keys == DEFAULT_MAX_KEYS

    def test_field_names_are_case_insensitive(self):
        query = parse_list_query(b'{"maxKeys": 5, "Prefix": "a/"}')

        assert query.max_keys == 5
        assert query.prefix == "a/"

    def test_null_yields_defaults(self):
        query = parse_list_query(b"null")

        assert query.prefix == ""
        assert query.marker == ""
        assert query.delimiter == ""
        assert query.max_keys == DEFAULT_MAX_KEYS

    @pytest.mark.parametrize("data", [
        b"",
        b"{not json",
        b"[]",
        b'"prefix"',
        b'{"maxkeys": "2"}',
        b'{"prefix": 7}',
    ])
    def test_invalid_query(self, data):
        with pytest.raises(QueryParseError):
            parse_list_query(data)
