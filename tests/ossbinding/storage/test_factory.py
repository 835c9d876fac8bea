"""Tests for the storage factory."""

from unittest.mock import patch

import pytest

from ossbinding.config import OSSMetadata
from ossbinding.error import ClientInitError
from ossbinding.storage.factory import StorageFactory
from ossbinding.storage.local import LocalStorage

pytestmark = pytest.mark.unit


class TestStorageFactory:

    @patch("ossbinding.storage.oss.OSSStorage")
    def test_oss_target(self, mock_oss_storage):
        config = OSSMetadata(endpoint="oss-cn-hangzhou.aliyuncs.com", accessKeyID="id", accessKey="key",
                             bucket="test-bucket", region="oss-cn-hangzhou")

        storage = StorageFactory.create_storage(config)

        mock_oss_storage.assert_called_once_with(
            endpoint="oss-cn-hangzhou.aliyuncs.com",
            access_key_id="id",
            access_key="key",
            bucket="test-bucket",
            region="oss-cn-hangzhou",
        )
        assert storage is mock_oss_storage.return_value

    @patch("ossbinding.storage.oss.OSSStorage")
    def test_oss_client_rejects_configuration(self, mock_oss_storage):
        cause = ValueError("Invalid endpoint: http://bad endpoint")
        mock_oss_storage.side_effect = cause

        with pytest.raises(ClientInitError, match="Invalid endpoint") as exc_info:
            StorageFactory.create_storage(OSSMetadata(endpoint="bad endpoint"))

        assert exc_info.value.__cause__ is cause

    def test_local_target(self, tmpdir):
        storage = StorageFactory.create_storage(OSSMetadata(target="local", baseDir=str(tmpdir), bucket="test-bucket"))

        assert isinstance(storage, LocalStorage)
        assert storage.bucket == "test-bucket"

    def test_local_target_without_base_dir(self):
        with pytest.raises(ClientInitError, match="failed to create local storage"):
            StorageFactory.create_storage(OSSMetadata(target="local", bucket="test-bucket"))

    def test_unknown_target(self):
        with pytest.raises(ClientInitError, match="unknown storage target azure"):
            StorageFactory.create_storage(OSSMetadata(target="azure"))
