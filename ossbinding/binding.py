"""
Output binding for an AliCloud OSS storage bucket.

The binding supports four operations against the configured bucket:

- create: stores the request data under the ``key`` metadata entry (a random
  key is generated when none is given). All other metadata entries become
  custom object metadata.
- get: returns the object stored under ``key`` together with its metadata
  headers. A missing object yields an empty response, not an error.
- delete: deletes the object stored under ``key``.
- list: returns one page of the bucket listing as JSON. The request data is a
  JSON query with the optional fields marker, prefix, maxkeys and delimiter.

The binding keeps no per-request state, so a single initialized instance can be
invoked from several threads at once.
"""

import logging
import uuid
from contextlib import closing
from typing import Optional

from ossbinding.bindings import BindingMetadata, InvokeRequest, InvokeResponse, OperationKind
from ossbinding.config import OSSMetadata, parse_list_query, parse_metadata
from ossbinding.constants import METADATA_KEY
from ossbinding.error import (
    ClientInitError,
    MissingKeyError,
    ResponseEncodeError,
    StorageDeleteError,
    StorageListError,
    StorageReadError,
    StorageWriteError,
    UnsupportedOperationError,
)
from ossbinding.storage.factory import StorageFactory
from ossbinding.storage.interface import StorageInterface


class AliCloudOSS:
    """A binding for an AliCloud OSS storage bucket."""

    def __init__(self):
        self.metadata: Optional[OSSMetadata] = None
        self.storage: Optional[StorageInterface] = None

    def init(self, metadata: BindingMetadata):
        """Parses the binding metadata and creates the storage client.

        Raises:
            ParseError: if the metadata properties cannot be parsed
            ClientInitError: if the storage client cannot be created
        """
        config = parse_metadata(metadata.properties)
        storage = StorageFactory.create_storage(config)

        self.metadata = config
        self.storage = storage
        logging.info(f"initialized alicloud oss binding {metadata.name} for bucket {config.bucket}")

    def operations(self) -> list[OperationKind]:
        return [
            OperationKind.CREATE,
            OperationKind.GET,
            OperationKind.DELETE,
            OperationKind.LIST,
        ]

    def invoke(self, request: InvokeRequest) -> InvokeResponse:
        try:
            operation = OperationKind(request.operation)
        except ValueError:
            logging.error(f"alicloud oss binding error: unsupported operation {request.operation}")
            raise UnsupportedOperationError(request.operation) from None

        if operation == OperationKind.CREATE:
            return self.create(request)
        elif operation == OperationKind.GET:
            return self.get(request)
        elif operation == OperationKind.DELETE:
            return self.delete(request)
        else:
            return self.list(request)

    def create(self, request: InvokeRequest) -> InvokeResponse:
        request_metadata = request.metadata or {}
        key = request_metadata.get(METADATA_KEY)
        if not key:
            key = str(uuid.uuid4())
            logging.debug(f"key not found. generating key {key}")

        object_metadata = {name: value for name, value in request_metadata.items() if name != METADATA_KEY}

        storage = self._get_storage()
        try:
            storage.put_object(key, request.data, object_metadata)
        except Exception as e:
            error_msg = f"alicloud oss binding error: error putting object {key}: {e}"
            logging.error(error_msg)
            raise StorageWriteError(error_msg) from e

        return InvokeResponse()

    def get(self, request: InvokeRequest) -> InvokeResponse:
        key = self._get_key(request)
        storage = self._get_storage()

        try:
            body = storage.get_object(key)
        except Exception as e:
            if storage.is_not_found(e):
                logging.debug(f"object {key} not found")
                return InvokeResponse()

            error_msg = f"alicloud oss binding error: error getting object {key}: {e}"
            logging.error(error_msg)
            raise StorageReadError(error_msg) from e

        with closing(body):
            try:
                data = body.read()
            except Exception as e:
                error_msg = f"alicloud oss binding error: error reading object {key}: {e}"
                logging.error(error_msg)
                raise StorageReadError(error_msg) from e

        try:
            headers = storage.get_object_meta(key)
        except Exception as e:
            error_msg = f"alicloud oss binding error: error reading metadata of {key}: {e}"
            logging.error(error_msg)
            raise StorageReadError(error_msg) from e

        return InvokeResponse(
            data=data,
            metadata={name: " ".join(values) for name, values in headers.items()},
        )

    def delete(self, request: InvokeRequest) -> InvokeResponse:
        key = self._get_key(request)
        storage = self._get_storage()

        try:
            storage.delete_object(key)
        except Exception as e:
            error_msg = f"alicloud oss binding error: error deleting {key}: {e}"
            logging.error(error_msg)
            raise StorageDeleteError(error_msg) from e

        return InvokeResponse()

    def list(self, request: InvokeRequest) -> InvokeResponse:
        query = parse_list_query(request.data)
        storage = self._get_storage()

        try:
            result = storage.list_objects(
                prefix=query.prefix,
                marker=query.marker,
                max_keys=query.max_keys,
                delimiter=query.delimiter,
            )
        except Exception as e:
            error_msg = f"alicloud oss binding error: error listing objects: {e}"
            logging.error(error_msg)
            raise StorageListError(error_msg) from e

        try:
            data = result.model_dump_json(by_alias=True).encode()
        except Exception as e:
            error_msg = f"alicloud oss binding error: list operation: cannot marshal objects to json: {e}"
            logging.error(error_msg)
            raise ResponseEncodeError(error_msg) from e

        return InvokeResponse(data=data)

    def _get_key(self, request: InvokeRequest) -> str:
        """Returns the object key of the request, which get and delete require."""
        key = (request.metadata or {}).get(METADATA_KEY)
        if not key:
            logging.error("alicloud oss binding error: can't read key value")
            raise MissingKeyError("alicloud oss binding error: can't read key value")

        return key

    def _get_storage(self) -> StorageInterface:
        if self.storage is None:
            raise ClientInitError("alicloud oss binding error: binding is not initialized")

        return self.storage
