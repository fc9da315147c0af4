"""
Registration helpers.

Each helper builds the matching producer and installs it with ``set``.
They return the container, so registrations chain::

    container.register(Clock, SystemClock).bind(Repo, SqlRepo).singleton(Service)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, TypeVar

from .descriptors import describe, is_instance, is_subclass
from .errors import TypeMismatchError
from .producers import FunctionProducer, Producer, SingletonProducer
from .resolver import constructor_producer

T = TypeVar("T")

Self = TypeVar("Self", bound="RegistrationMixin")


def _require_class(abstract: Any, concrete: Any) -> None:
    if not isinstance(concrete, type):
        raise TypeError(f"Expected a class to construct, got {describe(concrete)}")
    if not is_subclass(concrete, abstract):
        raise TypeMismatchError(
            abstract,
            concrete,
            f"{describe(concrete)} is not a subclass of {describe(abstract)}",
        )


class RegistrationMixin(ABC):
    """Registration helpers shared by containers."""

    @abstractmethod
    def set(self: Self, descriptor: Any, producer: Producer[Any]) -> Self:
        """Install ``producer`` under ``descriptor`` and return the container."""

    def register(self: Self, type_: Any, factory: Callable[[], T]) -> Self:
        """Register a transient factory, called on every resolution.

        What the factory returns is checked against ``type_`` on ``get``.

        Args:
            type_: Descriptor to register under
            factory: Zero-argument callable that creates instances
        """
        if not callable(factory):
            raise TypeError(f"Factory for {describe(type_)} is not callable")
        return self.set(type_, FunctionProducer(factory))

    def bind(self: Self, abstract: Any, concrete: type | None = None) -> Self:
        """Register ``concrete`` under ``abstract``, built per resolution.

        Constructor parameters are resolved from this container.

        Args:
            abstract: Descriptor to register under
            concrete: Subclass of ``abstract`` to construct (``abstract`` when omitted)
        """
        concrete = abstract if concrete is None else concrete
        _require_class(abstract, concrete)
        return self.set(abstract, constructor_producer(concrete, self))

    def singleton_instance(self: Self, type_: Any, instance: Any) -> Self:
        """Register a ready-made instance of ``type_``."""
        if not is_instance(type_, instance):
            raise TypeMismatchError(
                type_,
                type(instance),
                f"{describe(type(instance))} instance is not a {describe(type_)}",
            )
        return self.set(type_, SingletonProducer.from_instance(instance))

    def singleton(self: Self, abstract: Any, concrete: type | None = None) -> Self:
        """Register ``concrete`` under ``abstract``, built once on first use.

        Args:
            abstract: Descriptor to register under
            concrete: Subclass of ``abstract`` to construct (``abstract`` when omitted)
        """
        concrete = abstract if concrete is None else concrete
        _require_class(abstract, concrete)
        return self.set(abstract, SingletonProducer(constructor_producer(concrete, self)))
