"""
Type descriptors: the keys a container registers producers under.
"""

from __future__ import annotations

from typing import Any


def describe(descriptor: Any) -> str:
    """Return a readable name for a descriptor.

    Classes render as ``module.QualName`` (builtins without the module),
    anything else falls back to ``repr``.
    """
    if isinstance(descriptor, type):
        module = descriptor.__module__
        if module == "builtins":
            return descriptor.__qualname__
        return f"{module}.{descriptor.__qualname__}"
    return repr(descriptor)


def is_instance(descriptor: Any, value: Any) -> bool:
    """Check ``value`` against a class descriptor.

    Non-class keys and classes ``isinstance`` cannot check (non-runtime
    protocols) always pass.
    """
    if not isinstance(descriptor, type):
        return True
    try:
        return isinstance(value, descriptor)
    except TypeError:
        return True


def is_subclass(concrete: type, descriptor: Any) -> bool:
    """Check ``concrete`` against a class descriptor, with the same leniency."""
    if not isinstance(descriptor, type):
        return True
    try:
        return issubclass(concrete, descriptor)
    except TypeError:
        return True
