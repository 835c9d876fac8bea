"""
Storage clients for the OSS binding.

This package provides the storage client abstraction used by the binding and
its implementations: AliCloud OSS through boto3, and a local filesystem
directory for development and tests.
"""

from ossbinding.storage.factory import StorageFactory
from ossbinding.storage.interface import ListResult, ObjectOwner, ObjectProperties, StorageInterface
from ossbinding.storage.local import LocalStorage

__all__ = [
    'StorageFactory',
    'StorageInterface',
    'ListResult',
    'ObjectOwner',
    'ObjectProperties',
    'LocalStorage',
]
