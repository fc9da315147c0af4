"""
Producers: zero-argument factories a container resolves registrations with.

The family is closed. ``SingletonProducer`` caches, ``FunctionProducer``
and ``ConstructorProducer`` build a fresh value on every call.
"""

from __future__ import annotations

import inspect
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from wirebox.logging_config import get_logger

from .descriptors import describe
from .errors import ResolutionError

if TYPE_CHECKING:
    from .container import Container
    from .resolver import Parameter

logger = get_logger(__name__)

T = TypeVar("T")

_UNSET: Any = object()


class Producer(ABC, Generic[T]):
    """A zero-argument factory for a registered type."""

    __slots__ = ()

    @abstractmethod
    def produce(self) -> T:
        """Return an instance."""

    def __call__(self) -> T:
        return self.produce()


class SingletonProducer(Producer[T]):
    """Evaluates its factory once and returns the cached value forever after.

    Population is first-write-wins under a lock: concurrent first callers
    block until the value is cached and all observe the same object. A
    factory that raises leaves the producer unresolved, so the next call
    tries again.
    """

    __slots__ = ("_factory", "_value", "_lock")

    def __init__(self, factory: Callable[[], T]):
        self._factory = factory
        self._value: T = _UNSET
        # Re-entrant so a self-referencing graph recurses instead of deadlocking.
        self._lock = threading.RLock()

    @classmethod
    def from_instance(cls, instance: T) -> SingletonProducer[T]:
        producer = cls(lambda: instance)
        producer._value = instance
        return producer

    @property
    def is_resolved(self) -> bool:
        return self._value is not _UNSET

    def produce(self) -> T:
        value = self._value
        if value is not _UNSET:
            return value
        with self._lock:
            if self._value is _UNSET:
                self._value = self._factory()
                logger.debug("singleton_created", type=type(self._value).__qualname__)
            return self._value

    def __repr__(self) -> str:
        state = "resolved" if self.is_resolved else "pending"
        return f"SingletonProducer({self._factory!r}, {state})"


class FunctionProducer(Producer[T]):
    """Calls its factory on every ``produce``."""

    __slots__ = ("_factory",)

    def __init__(self, factory: Callable[[], T]):
        self._factory = factory

    def produce(self) -> T:
        return self._factory()

    def __repr__(self) -> str:
        return f"FunctionProducer({self._factory!r})"


class ConstructorProducer(Producer[T]):
    """Builds ``owner`` through ``constructor``, resolving each parameter.

    Parameters are resolved from ``container`` by annotation on every call,
    in declaration order. Keyword-only parameters are passed by name. A
    parameter with a default is skipped when its type is not registered;
    a positional-only one gets its default passed explicitly instead.
    """

    __slots__ = ("owner", "constructor", "parameters", "_container")

    def __init__(
        self,
        owner: type[T],
        constructor: Callable[..., T],
        parameters: Sequence[Parameter],
        container: Container,
    ):
        self.owner = owner
        self.constructor = constructor
        self.parameters = tuple(parameters)
        self._container = container

    def produce(self) -> T:
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        # After a skipped positional parameter the rest must go by name.
        skipped = False
        for param in self.parameters:
            if not param.annotated and not param.has_default:
                raise ResolutionError(self.owner, param.name)
            if param.has_default and not (
                param.annotated and self._container.has_registration(param.annotation)
            ):
                # Positional-only slots cannot be skipped; pass the default through.
                if param.kind is inspect.Parameter.POSITIONAL_ONLY:
                    args.append(param.default)
                else:
                    skipped = True
                continue
            value = self._container.get(param.annotation)
            if skipped or param.kind is inspect.Parameter.KEYWORD_ONLY:
                kwargs[param.name] = value
            else:
                args.append(value)
        return self.constructor(*args, **kwargs)

    def __repr__(self) -> str:
        return f"ConstructorProducer({describe(self.owner)}, {self.constructor!r})"
