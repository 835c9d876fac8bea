"""
Invocation envelope types shared between the host runtime and a binding.

A binding is initialized once with a BindingMetadata and then invoked any
number of times with an InvokeRequest, returning an InvokeResponse.
"""

from dataclasses import dataclass, field
from enum import Enum


class OperationKind(str, Enum):
    CREATE = "create"
    GET = "get"
    DELETE = "delete"
    LIST = "list"


@dataclass
class BindingMetadata:
    properties: dict[str, str] = field(default_factory=dict)
    name: str = ""


@dataclass
class InvokeRequest:
    operation: str
    data: bytes = b""
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass
class InvokeResponse:
    data: bytes = b""
    metadata: dict[str, str] = field(default_factory=dict)
