"""
Errors raised by the OSS binding.

Every error raised out of AliCloudOSS.init or AliCloudOSS.invoke is a
BindingError. Failures of the underlying storage client are chained as the
__cause__ of the wrapping error.
"""


class BindingError(Exception):
    """Base class for all binding errors."""
    pass


class ParseError(BindingError):
    """The binding configuration could not be parsed."""
    pass


class ClientInitError(BindingError):
    """The storage client could not be created from the configuration."""
    pass


class UnsupportedOperationError(BindingError):
    """The requested operation is not one the binding supports."""

    def __init__(self, operation: str):
        super().__init__(f"alicloud oss binding error: unsupported operation {operation}")
        self.operation = operation


class MissingKeyError(BindingError):
    """The request metadata does not carry the object key."""
    pass


class QueryParseError(BindingError):
    """The list query in the request data is not valid."""
    pass


class StorageWriteError(BindingError):
    pass


class StorageReadError(BindingError):
    pass


class StorageDeleteError(BindingError):
    pass


class StorageListError(BindingError):
    pass


class ResponseEncodeError(BindingError):
    pass
