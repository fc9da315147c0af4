"""
Dependency injection container.

Maps type descriptors to producers and resolves object graphs by
calling back into itself for every constructor parameter.

Usage:
    container = build_container(lambda c: (
        c.singleton_instance(Settings, Settings.from_env())
        .bind(UserRepo, SqlUserRepo)
        .singleton(UserService)
    ))
    container.verify()
    service = container[UserService]
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar, overload

from wirebox.logging_config import get_logger
from wirebox.settings import ContainerSettings

from .descriptors import describe, is_instance
from .errors import TypeMismatchError, UnregisteredTypeError, VerificationError
from .producers import Producer
from .registration import RegistrationMixin

logger = get_logger(__name__)

T = TypeVar("T")


class Container(RegistrationMixin):
    """Registry of descriptor -> producer.

    Build it from a single thread, then resolve from any number. A later
    registration for a descriptor replaces the earlier one.
    """

    def __init__(self) -> None:
        self._producers: dict[Any, Producer[Any]] = {}

    def set(self, descriptor: Any, producer: Producer[Any]) -> Container:
        """Install or replace the producer for a descriptor.

        Args:
            descriptor: Type (or other hashable key) to register under
            producer: Producer that resolves it

        Returns:
            This container
        """
        previous = self._producers.get(descriptor)
        self._producers[descriptor] = producer
        if previous is None:
            logger.debug("registration_added", type=describe(descriptor), producer=repr(producer))
        elif previous is not producer:
            logger.debug("registration_replaced", type=describe(descriptor), producer=repr(producer))
        return self

    @overload
    def get(self, descriptor: type[T]) -> T: ...

    @overload
    def get(self, descriptor: Any) -> Any: ...

    def get(self, descriptor: Any) -> Any:
        """Resolve an instance for a descriptor.

        Args:
            descriptor: Registered type or key

        Returns:
            The value the registered producer yields

        Raises:
            UnregisteredTypeError: If nothing is registered for descriptor
            TypeMismatchError: If a class descriptor resolves to something
                that is not an instance of it
        """
        producer = self._producers.get(descriptor)
        if producer is None:
            raise UnregisteredTypeError(descriptor)
        value = producer.produce()
        if not is_instance(descriptor, value):
            raise TypeMismatchError(descriptor, type(value))
        return value

    def has_registration(self, descriptor: Any) -> bool:
        """Check if a descriptor is registered, without resolving it."""
        return descriptor in self._producers

    def descriptors(self) -> list[Any]:
        """Registered descriptors in registration order."""
        return list(self._producers)

    def verify(self) -> None:
        """Resolve every registration once, failing fast on the first broken one.

        Raises:
            VerificationError: Naming the descriptor that failed; the
                underlying error is chained as its cause
        """
        descriptors = self.descriptors()
        logger.info("verify_started", registrations=len(descriptors))
        for descriptor in descriptors:
            try:
                self.get(descriptor)
            except Exception as exc:
                logger.error("verify_failed", type=describe(descriptor), error=str(exc))
                raise VerificationError(descriptor, exc) from exc
        logger.info("verify_completed", registrations=len(descriptors))

    def __getitem__(self, descriptor: type[T]) -> T:
        return self.get(descriptor)

    def __setitem__(self, descriptor: Any, producer: Producer[Any]) -> None:
        self.set(descriptor, producer)

    def __contains__(self, descriptor: object) -> bool:
        return self.has_registration(descriptor)

    def __len__(self) -> int:
        return len(self._producers)

    def __repr__(self) -> str:
        return f"Container({len(self._producers)} registrations)"


def build_container(
    setup: Callable[[Container], Any] | None = None,
    *,
    settings: ContainerSettings | None = None,
) -> Container:
    """Create a container, optionally configured by ``setup``.

    Args:
        setup: Callable receiving the new container
        settings: Build settings (defaults apply if not provided)

    Returns:
        The configured container, verified when ``settings.verify_on_build``
    """
    settings = settings or ContainerSettings()
    container = Container()
    if setup is not None:
        setup(container)
    if settings.verify_on_build:
        container.verify()
    return container
