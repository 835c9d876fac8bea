from unittest.mock import MagicMock

import pytest

from ossbinding.binding import AliCloudOSS
from ossbinding.bindings import BindingMetadata
from ossbinding.config import OSSMetadata
from ossbinding.storage.interface import StorageInterface


@pytest.fixture
def local_binding(tmpdir):
    """An initialized binding backed by a local storage directory."""
    binding = AliCloudOSS()
    binding.init(BindingMetadata(name="test-oss", properties={
        "target": "local",
        "baseDir": str(tmpdir.join("storage")),
        "bucket": "test-bucket",
    }))
    return binding


@pytest.fixture
def mock_storage():
    storage = MagicMock(spec=StorageInterface)
    storage.is_not_found.return_value = False
    return storage


@pytest.fixture
def mock_binding(mock_storage):
    """A binding whose storage client is a mock."""
    binding = AliCloudOSS()
    binding.metadata = OSSMetadata(bucket="test-bucket")
    binding.storage = mock_storage
    return binding
