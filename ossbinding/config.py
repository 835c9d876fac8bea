"""
Configuration models for the OSS binding.

The binding receives its configuration as a flat map of string properties and
its list queries as small JSON documents. Both are decoded into typed pydantic
models here. Property names are matched case-insensitively, so ``AccessKey``
and ``accessKey`` name the same property. Unknown properties are ignored and
missing properties fall back to their defaults (empty strings for the
connection settings).
"""

import json
import logging
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ossbinding.constants import DEFAULT_MAX_KEYS, STORAGE_TARGET_OSS
from ossbinding.error import ParseError, QueryParseError


def match_property_names(model_class: type[BaseModel], values: Mapping) -> dict[str, Any]:
    """Returns a copy of values keyed by the wire names of model_class.

    Only wire names (the alias, or the field name when there is none) are
    recognized, compared without regard to case. When a key matches exactly it
    wins over a key that only matches case-insensitively. Keys that do not match
    any wire name are dropped."""
    lookup = {}
    for name, field_info in model_class.model_fields.items():
        wire_name = field_info.alias or name
        lookup[wire_name.lower()] = wire_name

    exact_names = set(lookup.values())
    result = {}
    ignored = []
    # inexact matches first so that exact matches overwrite them
    for key in sorted(values, key=lambda k: k in exact_names):
        wire_name = lookup.get(str(key).lower())
        if wire_name is None:
            ignored.append(key)
            continue

        result[wire_name] = values[key]

    if ignored:
        logging.debug(f"ignoring unknown properties for {model_class.__name__}: {', '.join(map(str, ignored))}")

    return result


class OSSMetadata(BaseModel):
    """Connection settings of the binding. Immutable once parsed."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    endpoint: str = Field(default="", description="the OSS endpoint, for example oss-cn-hangzhou.aliyuncs.com")
    access_key_id: str = Field(default="", alias="accessKeyID", description="the access key id")
    access_key: str = Field(default="", alias="accessKey", description="the access key secret")
    bucket: str = Field(default="", description="the bucket all operations act on")
    region: Optional[str] = Field(
        default=None,
        description="the region used to sign requests, for example oss-cn-hangzhou. OSS endpoints may need it set, "
                    "requests are signed for us-east-1 when it is not",
    )
    target: str = Field(
        default=STORAGE_TARGET_OSS,
        description="which storage client to use: 'oss' (default) or 'local' for a filesystem directory",
    )
    base_dir: str = Field(default="", alias="baseDir", description="root directory of the 'local' storage target")

    @model_validator(mode="before")
    @classmethod
    def normalize_property_names(cls, values):
        if isinstance(values, Mapping):
            return match_property_names(cls, values)

        return values


class ListQuery(BaseModel):
    """The JSON document carried in the data of a list request."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    marker: str = Field(default="", description="list keys that sort after this key")
    prefix: str = Field(default="", description="only list keys starting with this prefix")
    max_keys: int = Field(default=DEFAULT_MAX_KEYS, alias="maxkeys", strict=True,
                          description="the maximum number of keys to return, 0 means the default page size")
    delimiter: str = Field(default="", description="groups keys sharing a prefix up to this character")

    @model_validator(mode="before")
    @classmethod
    def normalize_property_names(cls, values):
        if isinstance(values, Mapping):
            return match_property_names(cls, values)

        return values

    @field_validator("max_keys")
    @classmethod
    def default_max_keys(cls, value: int) -> int:
        if value == 0:
            return DEFAULT_MAX_KEYS

        return value


def parse_metadata(properties: Optional[Mapping]) -> OSSMetadata:
    """Parses the binding properties into an OSSMetadata.

    Raises:
        ParseError: if properties is not a map of strings
    """
    if properties is None:
        properties = {}

    try:
        return OSSMetadata.model_validate(properties)
    except ValidationError as e:
        error_msg = f"alicloud oss binding error: unable to parse metadata: {e}"
        logging.error(error_msg)
        raise ParseError(error_msg) from e


def parse_list_query(data: bytes) -> ListQuery:
    """Parses the JSON list query carried in the data of a list request.

    A JSON null is accepted and yields the default query.

    Raises:
        QueryParseError: if data is not a JSON object with valid fields
    """
    try:
        payload = json.loads(data)
        if payload is None:
            payload = {}

        return ListQuery.model_validate(payload)
    except (ValueError, TypeError) as e:
        # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
        error_msg = f"alicloud oss binding error: list operation: cannot unmarshal json to query: {e}"
        logging.error(error_msg)
        raise QueryParseError(error_msg) from e
