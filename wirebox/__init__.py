"""
wirebox: a small dependency injection container.

Register what implements what once, then let the container build
fully-wired object graphs:
- Transient factories and constructor bindings
- Lazily built, thread-safe singletons
- Constructor parameters resolved from type annotations
- Fail-fast verification of the whole graph
"""

__version__ = "0.1.0"

from wirebox.core import (
    ConstructorProducer,
    Container,
    FunctionProducer,
    Producer,
    ResolutionError,
    SingletonProducer,
    TypeMismatchError,
    UnregisteredTypeError,
    VerificationError,
    WireboxError,
    build_container,
    constructor,
)
from wirebox.settings import ContainerSettings

__all__ = [
    "ConstructorProducer",
    "Container",
    "ContainerSettings",
    "FunctionProducer",
    "Producer",
    "ResolutionError",
    "SingletonProducer",
    "TypeMismatchError",
    "UnregisteredTypeError",
    "VerificationError",
    "WireboxError",
    "build_container",
    "constructor",
]
