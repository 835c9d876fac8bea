"""
Storage factory for creating the storage client of the binding.

The client is selected by the ``target`` property of the binding configuration:
AliCloud OSS (the default) or a local filesystem directory.
"""

import logging

from ossbinding.config import OSSMetadata
from ossbinding.constants import STORAGE_TARGET_LOCAL, STORAGE_TARGET_OSS
from ossbinding.error import ClientInitError
from ossbinding.storage.interface import StorageInterface


class StorageFactory:
    """
    Factory class for creating storage clients.

    Creation never contacts the storage service.
    """

    @staticmethod
    def create_storage(config: OSSMetadata) -> StorageInterface:
        """
        Create and return the storage client described by config.

        Args:
            config: the parsed binding configuration

        Returns:
            StorageInterface: a storage client bound to config.bucket

        Raises:
            ClientInitError: if the target is unknown or the client rejects the configuration
        """
        if config.target == STORAGE_TARGET_OSS:
            return StorageFactory._create_oss_storage(config)

        if config.target == STORAGE_TARGET_LOCAL:
            return StorageFactory._create_local_storage(config)

        error_msg = f"alicloud oss binding error: unknown storage target {config.target}"
        logging.error(error_msg)
        raise ClientInitError(error_msg)

    @staticmethod
    def _create_oss_storage(config: OSSMetadata) -> StorageInterface:
        """Create an AliCloud OSS storage client."""
        from ossbinding.storage.oss import OSSStorage

        try:
            return OSSStorage(
                endpoint=config.endpoint,
                access_key_id=config.access_key_id,
                access_key=config.access_key,
                bucket=config.bucket,
                region=config.region,
            )
        except Exception as e:
            error_msg = f"alicloud oss binding error: failed to create oss client for endpoint {config.endpoint}: {e}"
            logging.error(error_msg)
            raise ClientInitError(error_msg) from e

    @staticmethod
    def _create_local_storage(config: OSSMetadata) -> StorageInterface:
        """Create a local filesystem storage client."""
        from ossbinding.storage.local import LocalStorage

        try:
            return LocalStorage(base_dir=config.base_dir, bucket=config.bucket)
        except Exception as e:
            error_msg = f"alicloud oss binding error: failed to create local storage in {config.base_dir}: {e}"
            logging.error(error_msg)
            raise ClientInitError(error_msg) from e
