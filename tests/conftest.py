import typing as t

import pytest

from lograck import MemorySink, Registry, SinkTypeRegistry, default_sink_types


class TrackingSink(MemorySink):
    """Memory sink that remembers every instance built through the registry."""

    name = "tracking"
    instances: t.ClassVar[list["TrackingSink"]] = []

    def __init__(self, **kwargs: t.Any) -> None:
        super().__init__(**kwargs)
        TrackingSink.instances.append(self)


class BrokenSink(MemorySink):
    name = "broken"

    def __init__(self, **kwargs: t.Any) -> None:
        raise RuntimeError("cannot open sink")


class FailingCloseSink(MemorySink):
    """Memory sink whose close marks it closed, then fails to flush."""

    name = "failing"

    def close(self) -> None:
        super().close()
        raise OSError("flush failed")


@pytest.fixture(autouse=True)
def reset_tracking():
    TrackingSink.instances.clear()
    yield
    TrackingSink.instances.clear()


@pytest.fixture
def sink_types() -> SinkTypeRegistry:
    types = default_sink_types()
    types.register("tracking", TrackingSink)
    types.register("broken", BrokenSink)
    types.register("failing", FailingCloseSink)
    return types


@pytest.fixture
def registry(sink_types):
    """A registry with no shared sinks; closed after the test."""
    reg = Registry(sink_types=sink_types)
    yield reg
    reg.close()


@pytest.fixture
def shared_sink() -> MemorySink:
    return MemorySink(id="shared")


@pytest.fixture
def shared_registry(sink_types, shared_sink):
    """A registry whose base logger owns one shared memory sink."""
    reg = Registry({"transports": [shared_sink]}, sink_types=sink_types)
    yield reg
    reg.close()


@pytest.fixture
def tracked() -> list[TrackingSink]:
    """Every ``tracking`` sink built during the test, in construction order."""
    return TrackingSink.instances
