"""
Local filesystem storage implementation.

This module provides a concrete implementation of the StorageInterface protocol
backed by a directory, for development and tests. The bucket maps to a
subdirectory of the base directory: object bodies are stored under
``<base_dir>/<bucket>/objects`` and custom metadata as JSON documents under
``<base_dir>/<bucket>/metadata``.

Keys map to relative file paths, so a key cannot be both an object and the
"directory" of another object (``a`` and ``a/b``). Keys that a path would
normalize (``dir/``, ``a//b``, ``a/./b``) are rejected with ValueError.
"""

import hashlib
import json
import logging
from datetime import datetime, timezone
from email.utils import formatdate
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Union

from ossbinding.constants import USER_METADATA_HEADER_PREFIX
from ossbinding.storage.interface import ListResult, ObjectProperties, StorageInterface, canonical_header_name


class LocalStorage(StorageInterface):
    """
    Local filesystem storage implementation.

    Missing objects raise FileNotFoundError.
    """

    def __init__(self, base_dir: Union[str, Path], bucket: str):
        """
        Initialize local storage.

        Args:
            base_dir: base directory for storage (the bucket becomes a subdirectory)
            bucket: the bucket all operations act on
        """
        if not str(base_dir):
            raise ValueError("base_dir must be provided when initializing LocalStorage")

        self.base_dir = Path(base_dir)
        self.bucket = bucket
        self._objects_dir().mkdir(parents=True, exist_ok=True)
        self._metadata_dir().mkdir(parents=True, exist_ok=True)

    def _bucket_path(self) -> Path:
        """Return the filesystem path for the bucket."""
        return self.base_dir / self.bucket

    def _objects_dir(self) -> Path:
        return self._bucket_path() / "objects"

    def _metadata_dir(self) -> Path:
        return self._bucket_path() / "metadata"

    def _resolve_key(self, root: Path, key: str, suffix: str = "") -> Path:
        if PurePosixPath(key).as_posix() != key:
            raise ValueError(f"invalid object key: {key}")

        root = root.resolve()
        path = (root / f"{key}{suffix}").resolve()
        if path == root or root not in path.parents:
            raise ValueError(f"invalid object key: {key}")

        return path

    def _object_path(self, key: str) -> Path:
        """Return the filesystem path for an object."""
        return self._resolve_key(self._objects_dir(), key)

    def _object_metadata_path(self, key: str) -> Path:
        return self._resolve_key(self._metadata_dir(), key, ".json")

    def put_object(self, key: str, data: bytes, metadata: dict[str, str]) -> None:
        dest = self._object_path(key)
        meta_dest = self._object_metadata_path(key)
        dest.parent.mkdir(parents=True, exist_ok=True)
        meta_dest.parent.mkdir(parents=True, exist_ok=True)

        dest.write_bytes(data)
        meta_dest.write_text(json.dumps(metadata))
        logging.info("stored %s/%s (%d bytes)", self.bucket, key, len(data))

    def get_object(self, key: str) -> BinaryIO:
        path = self._object_path(key)
        if not path.is_file():
            raise FileNotFoundError(f"object not found in storage: {self.bucket}/{key}")

        return open(path, "rb")

    def get_object_meta(self, key: str) -> dict[str, list[str]]:
        path = self._object_path(key)
        if not path.is_file():
            raise FileNotFoundError(f"object not found in storage: {self.bucket}/{key}")

        stat = path.stat()
        headers = {
            "Content-Length": [str(stat.st_size)],
            "Content-Type": ["application/octet-stream"],
            "Etag": [f'"{self._etag(path)}"'],
            "Last-Modified": [formatdate(stat.st_mtime, usegmt=True)],
        }

        meta_path = self._object_metadata_path(key)
        if meta_path.is_file():
            for name, value in json.loads(meta_path.read_text()).items():
                headers[canonical_header_name(f"{USER_METADATA_HEADER_PREFIX}{name}")] = [value]

        return headers

    def delete_object(self, key: str) -> None:
        for path in (self._object_path(key), self._object_metadata_path(key)):
            if path.exists():
                path.unlink()

        logging.info("deleted %s/%s", self.bucket, key)

    def list_objects(self, prefix: str = "", marker: str = "", max_keys: int = 1000, delimiter: str = "") -> ListResult:
        if max_keys < 0:
            raise ValueError(f"invalid max_keys: {max_keys}")

        objects_dir = self._objects_dir()
        keys = sorted(
            path.relative_to(objects_dir).as_posix()
            for path in objects_dir.rglob("*")
            if path.is_file()
        )

        result = ListResult(prefix=prefix, marker=marker, max_keys=max_keys, delimiter=delimiter)
        entry_count = 0
        last_entry = ""

        for key in keys:
            if not key.startswith(prefix) or key <= marker:
                continue

            common_prefix = None
            if delimiter:
                index = key.find(delimiter, len(prefix))
                if index >= 0:
                    common_prefix = key[:index + len(delimiter)]

            if common_prefix is not None:
                # a group already listed, or one the marker has moved past
                if common_prefix <= marker:
                    continue
                if result.common_prefixes and result.common_prefixes[-1] == common_prefix:
                    continue

            if entry_count == max_keys:
                result.is_truncated = True
                result.next_marker = last_entry
                break

            if common_prefix is not None:
                result.common_prefixes.append(common_prefix)
                last_entry = common_prefix
            else:
                result.objects.append(self._object_properties(key))
                last_entry = key

            entry_count += 1

        return result

    def _object_properties(self, key: str) -> ObjectProperties:
        path = self._objects_dir() / key
        stat = path.stat()
        return ObjectProperties(
            key=key,
            type="Normal",
            size=stat.st_size,
            etag=f'"{self._etag(path)}"',
            last_modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            storage_class="Standard",
        )

    def _etag(self, path: Path) -> str:
        return hashlib.md5(path.read_bytes()).hexdigest().upper()

    def is_not_found(self, error: Exception) -> bool:
        return isinstance(error, FileNotFoundError)
