"""
Core primitives for wirebox.
"""

from .container import Container, build_container
from .descriptors import describe
from .errors import (
    ResolutionError,
    TypeMismatchError,
    UnregisteredTypeError,
    VerificationError,
    WireboxError,
)
from .producers import ConstructorProducer, FunctionProducer, Producer, SingletonProducer
from .resolver import Parameter, constructor, constructor_producer, inspect_parameters

__all__ = [
    "ConstructorProducer",
    "Container",
    "FunctionProducer",
    "Parameter",
    "Producer",
    "ResolutionError",
    "SingletonProducer",
    "TypeMismatchError",
    "UnregisteredTypeError",
    "VerificationError",
    "WireboxError",
    "build_container",
    "constructor",
    "constructor_producer",
    "describe",
    "inspect_parameters",
]
