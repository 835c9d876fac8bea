"""
Storage client abstraction used by the OSS binding.

A storage client is bound to a single bucket. Its methods let the errors of the
underlying service propagate unchanged; callers use is_not_found() to recognize
a missing object without depending on a concrete SDK error type.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import BinaryIO, Optional

from pydantic import BaseModel, ConfigDict, Field


class ObjectOwner(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default="", alias="ID")
    display_name: str = Field(default="", alias="DisplayName")


class ObjectProperties(BaseModel):
    """A single entry of a bucket listing."""
    model_config = ConfigDict(populate_by_name=True)

    key: str = Field(alias="Key")
    type: str = Field(default="", alias="Type")
    size: int = Field(default=0, alias="Size")
    etag: str = Field(default="", alias="ETag")
    last_modified: Optional[datetime] = Field(default=None, alias="LastModified")
    storage_class: str = Field(default="", alias="StorageClass")
    owner: Optional[ObjectOwner] = Field(default=None, alias="Owner")


class ListResult(BaseModel):
    """One page of a bucket listing."""
    model_config = ConfigDict(populate_by_name=True)

    prefix: str = Field(default="", alias="Prefix")
    marker: str = Field(default="", alias="Marker")
    max_keys: int = Field(default=0, alias="MaxKeys")
    delimiter: str = Field(default="", alias="Delimiter")
    is_truncated: bool = Field(default=False, alias="IsTruncated")
    next_marker: str = Field(default="", alias="NextMarker")
    objects: list[ObjectProperties] = Field(default_factory=list, alias="Objects")
    common_prefixes: list[str] = Field(default_factory=list, alias="CommonPrefixes")


class StorageInterface(ABC):
    """Object operations against a single bucket."""

    @abstractmethod
    def put_object(self, key: str, data: bytes, metadata: dict[str, str]) -> None:
        """Stores data under key, replacing any existing object.

        Args:
            key: the object key
            data: the full object body
            metadata: custom object metadata
        """
        ... # pragma: no cover

    @abstractmethod
    def get_object(self, key: str) -> BinaryIO:
        """Returns a readable body for the object stored under key. The caller closes it."""
        ... # pragma: no cover

    @abstractmethod
    def get_object_meta(self, key: str) -> dict[str, list[str]]:
        """Returns the response headers describing the object, keyed by canonical header name."""
        ... # pragma: no cover

    @abstractmethod
    def delete_object(self, key: str) -> None:
        ... # pragma: no cover

    @abstractmethod
    def list_objects(self, prefix: str = "", marker: str = "", max_keys: int = 1000, delimiter: str = "") -> ListResult:
        """Returns a single page of the bucket listing."""
        ... # pragma: no cover

    @abstractmethod
    def is_not_found(self, error: Exception) -> bool:
        """Returns True if error means the requested object does not exist."""
        ... # pragma: no cover


def canonical_header_name(name: str) -> str:
    """Returns the canonical form of an HTTP header name (x-oss-meta-owner -> X-Oss-Meta-Owner)."""
    return "-".join(part.capitalize() for part in name.split("-"))
