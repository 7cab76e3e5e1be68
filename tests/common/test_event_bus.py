from dataclasses import dataclass

from academic_records.common.events import EventBus


@dataclass(frozen=True)
class Ping:
    n: int


@dataclass(frozen=True)
class Pong:
    n: int


def test_handlers_receive_only_their_event_type():
    bus = EventBus()
    pings, pongs = [], []
    bus.subscribe(Ping, pings.append)
    bus.subscribe(Pong, pongs.append)

    bus.publish(Ping(1))

    assert pings == [Ping(1)]
    assert pongs == []


def test_failing_handler_does_not_stop_the_rest(caplog):
    bus = EventBus()
    seen = []

    def broken(event):
        raise ValueError("nope")

    bus.subscribe(Ping, broken)
    bus.subscribe(Ping, seen.append)

    bus.publish(Ping(2))

    assert seen == [Ping(2)]
    assert "failed for Ping" in caplog.text
