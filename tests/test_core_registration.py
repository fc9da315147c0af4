from typing import Protocol

import pytest

from wirebox.core import TypeMismatchError
from wirebox.core.registration import RegistrationMixin


class Clock:
    pass


class SystemClock(Clock):
    pass


class Store:
    pass


class Scheduler:
    def __init__(self, clock: Clock, store: Store):
        self.clock = clock
        self.store = store


class Job:
    instances = 0

    def __init__(self, scheduler: Scheduler):
        Job.instances += 1
        self.scheduler = scheduler


class Ticker(Protocol):
    def tick(self) -> None: ...


def test_register_installs_transient_factory(container, make_counter):
    counter = make_counter(SystemClock)
    assert container.register(Clock, counter) is container
    first = container.get(Clock)
    assert isinstance(first, SystemClock)
    assert container.get(Clock) is not first
    assert counter.calls == 2


def test_register_rejects_non_callable(container):
    with pytest.raises(TypeError, match="not callable"):
        container.register(Clock, SystemClock())


def test_register_factory_of_wrong_type_fails_on_get(container):
    container.register(Clock, Store)
    with pytest.raises(TypeMismatchError) as excinfo:
        container.get(Clock)
    assert excinfo.value.actual is Store


def test_bind_builds_concrete_under_abstract(container):
    container.bind(Clock, SystemClock).bind(Store).bind(Scheduler)

    scheduler = container.get(Scheduler)
    assert isinstance(scheduler.clock, SystemClock)
    assert isinstance(scheduler.store, Store)
    assert container.get(Scheduler) is not scheduler
    assert container.get(Clock) is not container.get(Clock)


def test_bind_before_dependencies_are_registered(container):
    container.bind(Scheduler)
    container.bind(Clock, SystemClock)
    container.bind(Store)
    assert isinstance(container[Scheduler].clock, SystemClock)


def test_bind_uses_current_dependency_registrations(container):
    store = Store()
    container.bind(Scheduler).bind(Clock, SystemClock).singleton_instance(Store, store)
    assert container[Scheduler].store is store

    replacement = Store()
    container.singleton_instance(Store, replacement)
    assert container[Scheduler].store is replacement


def test_bind_rejects_non_class(container):
    with pytest.raises(TypeError, match="Expected a class"):
        container.bind(Clock, SystemClock())


def test_bind_rejects_unrelated_class(container):
    with pytest.raises(TypeMismatchError, match="is not a subclass of"):
        container.bind(Clock, Store)
    assert Clock not in container


def test_bind_allows_protocol_and_string_keys(container):
    class Metronome:
        def tick(self) -> None:
            pass

    container.bind(Ticker, Metronome).bind("clock", SystemClock)
    assert isinstance(container[Ticker], Metronome)
    assert isinstance(container["clock"], SystemClock)


def test_singleton_instance(container):
    clock = SystemClock()
    container.singleton_instance(Clock, clock)
    assert container[Clock] is clock
    assert container[Clock] is clock


def test_singleton_instance_rejects_wrong_type(container):
    with pytest.raises(TypeMismatchError, match="int instance is not a"):
        container.singleton_instance(Clock, 42)
    assert Clock not in container


def test_singleton_instance_non_class_key(container):
    container.singleton_instance("port", 8080)
    assert container["port"] == 8080


def test_singleton_constructs_lazily_once(container):
    Job.instances = 0
    container.singleton(Job).bind(Scheduler).bind(Clock, SystemClock).bind(Store)
    assert Job.instances == 0

    first = container[Job]
    assert container[Job] is first
    assert Job.instances == 1


def test_singleton_with_abstract_and_concrete(container):
    container.singleton(Clock, SystemClock)
    assert isinstance(container[Clock], SystemClock)
    assert container[Clock] is container[Clock]


def test_singleton_shared_across_dependents(container):
    container.singleton(Clock, SystemClock).bind(Store).bind(Scheduler)
    assert container[Scheduler].clock is container[Scheduler].clock


def test_singleton_rejects_non_class(container):
    with pytest.raises(TypeError):
        container.singleton(Clock, "SystemClock")


def test_singleton_rejects_unrelated_class(container):
    with pytest.raises(TypeMismatchError):
        container.singleton(Clock, Store)
    assert Clock not in container


def test_reregistration_replaces_producer(container, counter):
    container.register(Clock, counter)
    container.singleton(Clock, SystemClock)
    assert isinstance(container[Clock], SystemClock)
    assert counter.calls == 0


def test_registration_mixin_requires_set():
    with pytest.raises(TypeError):
        RegistrationMixin()
