"""
AliCloud OSS output binding.

This package implements a binding that performs create, get, delete and list
operations against a single AliCloud OSS bucket on behalf of a component
runtime.
"""

from ossbinding.binding import AliCloudOSS
from ossbinding.bindings import BindingMetadata, InvokeRequest, InvokeResponse, OperationKind
from ossbinding.config import ListQuery, OSSMetadata, parse_list_query, parse_metadata
from ossbinding.error import (
    BindingError,
    ClientInitError,
    MissingKeyError,
    ParseError,
    QueryParseError,
    ResponseEncodeError,
    StorageDeleteError,
    StorageListError,
    StorageReadError,
    StorageWriteError,
    UnsupportedOperationError,
)

__all__ = [
    'AliCloudOSS',
    'BindingMetadata',
    'InvokeRequest',
    'InvokeResponse',
    'OperationKind',
    'ListQuery',
    'OSSMetadata',
    'parse_list_query',
    'parse_metadata',
    'BindingError',
    'ClientInitError',
    'MissingKeyError',
    'ParseError',
    'QueryParseError',
    'ResponseEncodeError',
    'StorageDeleteError',
    'StorageListError',
    'StorageReadError',
    'StorageWriteError',
    'UnsupportedOperationError',
]
