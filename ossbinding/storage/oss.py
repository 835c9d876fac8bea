"""
AliCloud OSS storage client using boto3.

OSS exposes an S3-compatible API, so the client is a boto3 S3 client pointed at
the OSS endpoint with virtual-hosted bucket addressing. All operations act on
the single bucket the client was created for.
"""

import logging
from typing import BinaryIO, Optional

try:
    import boto3
    import botocore.exceptions
    from botocore.config import Config as BotoConfig
    HAS_BOTO3 = True
except ImportError:
    HAS_BOTO3 = False

from ossbinding.constants import OSS_ERROR_NO_SUCH_KEY
from ossbinding.storage.interface import (
    ListResult,
    ObjectOwner,
    ObjectProperties,
    StorageInterface,
    canonical_header_name,
)


def _require_boto3():
    if not HAS_BOTO3:
        raise RuntimeError("boto3 is required for OSS storage - install it with: pip install boto3")


def get_endpoint_url(endpoint: str) -> str:
    """Returns endpoint as a URL, defaulting to http when no scheme is given (as the OSS SDKs do)."""
    if "://" in endpoint:
        return endpoint

    return f"http://{endpoint}"


class OSSStorage(StorageInterface):
    """
    AliCloud OSS storage implementation using boto3.

    Creating the client does not contact the service. Invalid endpoints are
    rejected by botocore at construction time, everything else (unknown bucket,
    bad credentials) surfaces on the first request.
    """

    def __init__(
        self,
        endpoint: str,
        access_key_id: str,
        access_key: str,
        bucket: str,
        region: Optional[str] = None,
    ):
        """
        Initialize the OSS storage client.

        Args:
            endpoint: OSS endpoint, with or without a scheme
            access_key_id: the access key id
            access_key: the access key secret
            bucket: the bucket all operations act on
            region: the region used to sign requests (optional)
        """
        _require_boto3()

        self.endpoint = endpoint
        self.endpoint_url = get_endpoint_url(endpoint)
        self.access_key_id = access_key_id
        self.access_key = access_key
        self.bucket = bucket
        self.region = region or None

        self.client = boto3.client(
            "s3",
            endpoint_url=self.endpoint_url,
            aws_access_key_id=self.access_key_id,
            aws_secret_access_key=self.access_key,
            region_name=self.region,
            config=BotoConfig(signature_version="s3v4", s3={"addressing_style": "virtual"}),
        )

        logging.debug("created oss client for bucket %s at %s", self.bucket, self.endpoint_url)

    def put_object(self, key: str, data: bytes, metadata: dict[str, str]) -> None:
        self.client.put_object(Bucket=self.bucket, Key=key, Body=data, Metadata=metadata)

    def get_object(self, key: str) -> BinaryIO:
        response = self.client.get_object(Bucket=self.bucket, Key=key)
        return response["Body"]

    def get_object_meta(self, key: str) -> dict[str, list[str]]:
        response = self.client.head_object(Bucket=self.bucket, Key=key)
        headers = response.get("ResponseMetadata", {}).get("HTTPHeaders", {})
        return {canonical_header_name(name): [value] for name, value in headers.items()}

    def delete_object(self, key: str) -> None:
        self.client.delete_object(Bucket=self.bucket, Key=key)

    def list_objects(self, prefix: str = "", marker: str = "", max_keys: int = 1000, delimiter: str = "") -> ListResult:
        kwargs = {"Bucket": self.bucket, "MaxKeys": max_keys}
        if prefix:
            kwargs["Prefix"] = prefix
        if marker:
            kwargs["Marker"] = marker
        if delimiter:
            kwargs["Delimiter"] = delimiter

        response = self.client.list_objects(**kwargs)

        objects = []
        for entry in response.get("Contents", []):
            owner = None
            if "Owner" in entry:
                owner = ObjectOwner(
                    id=entry["Owner"].get("ID", ""),
                    display_name=entry["Owner"].get("DisplayName", ""),
                )

            objects.append(ObjectProperties(
                key=entry["Key"],
                size=entry.get("Size", 0),
                etag=entry.get("ETag", ""),
                last_modified=entry.get("LastModified"),
                storage_class=entry.get("StorageClass", ""),
                owner=owner,
            ))

        is_truncated = response.get("IsTruncated", False)
        next_marker = response.get("NextMarker", "")
        # NextMarker is only returned when a delimiter is used
        if is_truncated and not next_marker and objects:
            next_marker = objects[-1].key

        return ListResult(
            prefix=response.get("Prefix", prefix),
            marker=response.get("Marker", marker),
            max_keys=response.get("MaxKeys", max_keys),
            delimiter=response.get("Delimiter", delimiter),
            is_truncated=is_truncated,
            next_marker=next_marker,
            objects=objects,
            common_prefixes=[entry["Prefix"] for entry in response.get("CommonPrefixes", [])],
        )

    def is_not_found(self, error: Exception) -> bool:
        if not HAS_BOTO3 or not isinstance(error, botocore.exceptions.ClientError):
            return False

        status_code = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        error_code = error.response.get("Error", {}).get("Code")
        return status_code == 404 and error_code == OSS_ERROR_NO_SUCH_KEY
