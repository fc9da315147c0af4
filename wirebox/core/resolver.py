"""
Constructor resolution.

Decides which constructor of a concrete class a container uses and binds
it into a ``ConstructorProducer``.

Candidates, in order:
    - the class itself, i.e. ``cls(...)`` with its ``__init__`` signature
    - every classmethod/staticmethod marked with ``@constructor``, walking
      the MRO in definition order

The class call is the primary constructor when every required parameter
carries a type annotation; it is always used when primary. Otherwise the
first candidate whose required parameters are all registered wins. That
check happens once, at bind time, and is not repeated when the producer
runs. With nothing satisfiable the class call is used and the failure
surfaces when the producer runs.

Example:
    class Mailer:
        def __init__(self, host):  # untyped, so not primary
            self.host = host

        @constructor
        @classmethod
        def from_settings(cls, settings: Settings) -> Mailer:
            return cls(settings.smtp_host)
"""

from __future__ import annotations

import inspect
import sys
import types
import typing
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from wirebox.logging_config import get_logger

from .descriptors import describe
from .producers import ConstructorProducer

if TYPE_CHECKING:
    from .container import Container

logger = get_logger(__name__)

T = TypeVar("T")

_CONSTRUCTOR_MARK = "__wirebox_constructor__"
_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


@dataclass(frozen=True)
class Parameter:
    """One resolvable constructor parameter."""

    name: str
    annotation: Any
    kind: inspect._ParameterKind
    default: Any = inspect.Parameter.empty

    @property
    def has_default(self) -> bool:
        return self.default is not inspect.Parameter.empty

    @property
    def annotated(self) -> bool:
        return self.annotation is not inspect.Parameter.empty


def constructor(func: Any) -> Any:
    """Mark a classmethod or staticmethod as an alternate constructor."""
    target = func.__func__ if isinstance(func, (classmethod, staticmethod)) else func
    setattr(target, _CONSTRUCTOR_MARK, True)
    return func


def _unwrap_optional(annotation: Any) -> Any:
    """Reduce ``Optional[T]`` and ``T | None`` to ``T``."""
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _resolve_string(annotation: str, owner: type | None) -> Any:
    """Look a string annotation up in the owner's module, else keep it."""
    if owner is None:
        return annotation
    if annotation == owner.__name__:
        return owner
    module = sys.modules.get(owner.__module__)
    if module is not None and hasattr(module, annotation):
        return getattr(module, annotation)
    return annotation


def _type_hints(func: Any, owner: type | None) -> dict[str, Any]:
    localns = {owner.__name__: owner} if owner is not None else None
    try:
        return typing.get_type_hints(func, localns=localns)
    except Exception:
        # Unresolvable forward references; fall back per annotation.
        raw = getattr(func, "__annotations__", None) or {}
        return {
            name: _resolve_string(ann, owner) if isinstance(ann, str) else ann
            for name, ann in raw.items()
        }


def _class_hints(cls: type) -> dict[str, Any]:
    hints: dict[str, Any] = {}
    for attr, base in (("__new__", object.__new__), ("__init__", object.__init__)):
        func = getattr(cls, attr, None)
        if func is None or func is base:
            continue
        hints.update(_type_hints(func, cls))
    return hints


def inspect_parameters(func: Callable[..., Any], owner: type | None = None) -> list[Parameter] | None:
    """Return the ordered resolvable parameters of ``func``.

    ``*args``/``**kwargs`` and bound ``self``/``cls`` are left out. Returns
    None when the signature cannot be read (some builtins).
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return None

    if isinstance(func, type):
        hints = _class_hints(func)
        owner = owner or func
    else:
        hints = _type_hints(func, owner)

    params: list[Parameter] = []
    for name, param in signature.parameters.items():
        if param.kind in _SKIPPED_KINDS:
            continue
        annotation = hints.get(name, param.annotation)
        if isinstance(annotation, str):
            annotation = _resolve_string(annotation, owner)
        annotation = _unwrap_optional(annotation)
        params.append(
            Parameter(
                name=name,
                annotation=annotation,
                kind=param.kind,
                default=param.default,
            )
        )
    return params


def constructors_of(cls: type[T]) -> list[tuple[Callable[..., T], list[Parameter] | None]]:
    """Enumerate candidate constructors of ``cls`` with their parameters."""
    candidates: list[tuple[Callable[..., T], list[Parameter] | None]] = [
        (cls, inspect_parameters(cls))
    ]
    seen: set[str] = set()
    for klass in cls.__mro__:
        for name, attr in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if not isinstance(attr, (classmethod, staticmethod)):
                continue
            if not getattr(attr.__func__, _CONSTRUCTOR_MARK, False):
                continue
            bound = getattr(cls, name)
            candidates.append((bound, inspect_parameters(bound, cls)))
    return candidates


def _is_primary(params: list[Parameter] | None) -> bool:
    return params is not None and all(p.annotated for p in params if not p.has_default)


def _is_satisfiable(params: list[Parameter] | None, container: Container) -> bool:
    if params is None:
        return False
    return all(
        p.annotated and container.has_registration(p.annotation)
        for p in params
        if not p.has_default
    )


def constructor_producer(cls: type[T], container: Container) -> ConstructorProducer[T]:
    """Select a constructor for ``cls`` and bind it to ``container``."""
    candidates = constructors_of(cls)
    chosen = candidates[0]
    if not _is_primary(chosen[1]):
        chosen = next(
            (c for c in candidates if _is_satisfiable(c[1], container)),
            candidates[0],
        )

    func, params = chosen
    logger.debug(
        "constructor_selected",
        type=describe(cls),
        constructor=getattr(func, "__name__", repr(func)),
        parameters=[p.name for p in params or ()],
    )
    return ConstructorProducer(cls, func, params or (), container)
