"""
Exceptions raised while registering and resolving dependencies.
"""

from __future__ import annotations

from typing import Any

from .descriptors import describe


class WireboxError(Exception):
    """Base class for all container errors."""


class UnregisteredTypeError(WireboxError, LookupError):
    """Raised when ``get`` is called for a descriptor with no producer."""

    def __init__(self, descriptor: Any, message: str | None = None):
        self.descriptor = descriptor
        self.message = message or f"No registration for type {describe(descriptor)}"
        super().__init__(self.message)


class ResolutionError(WireboxError):
    """Raised when a constructor parameter cannot be resolved by its type."""

    def __init__(self, owner: Any, parameter: str, message: str | None = None):
        self.owner = owner
        self.parameter = parameter
        self.message = message or (
            f"Parameter '{parameter}' of {describe(owner)} has no type annotation"
        )
        super().__init__(self.message)


class VerificationError(WireboxError):
    """Raised by ``verify`` with the descriptor whose resolution failed.

    The underlying failure is available as ``__cause__``.
    """

    def __init__(self, descriptor: Any, cause: BaseException):
        self.descriptor = descriptor
        self.message = f"{describe(descriptor)}: Failed ({cause})"
        super().__init__(self.message)


class TypeMismatchError(WireboxError, TypeError):
    """Raised when a registration yields something that is not its type."""

    def __init__(self, descriptor: Any, actual: Any, message: str | None = None):
        self.descriptor = descriptor
        self.actual = actual
        self.message = message or (
            f"{describe(descriptor)} resolved to an instance of {describe(actual)}"
        )
        super().__init__(self.message)
