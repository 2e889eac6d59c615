"""Unit tests for /src/session/transport.py"""

from src.session.transport import EventKind, MemoryHub, MemoryTransport, TransportEvent


def drain(transport: MemoryTransport) -> list[TransportEvent]:
    events = []
    while not transport.events.empty():
        events.append(transport.events.get_nowait())
    return events


def test_connect_opens_both_sides(transport_pair: tuple[MemoryTransport, MemoryTransport]) -> None:
    host, guest = transport_pair
    host.open("room-1")
    guest.connect("room-1")

    assert host.is_open and guest.is_open
    assert drain(host) == [TransportEvent(EventKind.OPENED)]
    assert drain(guest) == [TransportEvent(EventKind.OPENED)]


def test_messages_arrive_in_order(transport_pair: tuple[MemoryTransport, MemoryTransport]) -> None:
    host, guest = transport_pair
    host.open("room-1")
    guest.connect("room-1")
    drain(host)

    for index in range(5):
        assert guest.send(f"message {index}")

    assert [event.data for event in drain(host)] == [f"message {index}" for index in range(5)]


def test_send_without_peer(hub: MemoryHub) -> None:
    transport = MemoryTransport(hub)
    assert transport.send("hello?") is False
    transport.open("room-1")
    assert transport.send("anyone?") is False


def test_connect_to_unknown_channel(transport_pair: tuple[MemoryTransport, MemoryTransport]) -> None:
    _, guest = transport_pair
    guest.connect("nobody-here")
    events = drain(guest)
    assert len(events) == 1
    assert events[0].kind == EventKind.ERROR
    assert not guest.is_open


def test_channel_collision(hub: MemoryHub) -> None:
    first, second = MemoryTransport(hub), MemoryTransport(hub)
    first.open("room-1")
    second.open("room-1")
    assert [event.kind for event in drain(second)] == [EventKind.ERROR]


def test_third_peer_is_refused(hub: MemoryHub) -> None:
    host, guest, intruder = MemoryTransport(hub), MemoryTransport(hub), MemoryTransport(hub)
    host.open("room-1")
    guest.connect("room-1")
    intruder.connect("room-1")
    assert [event.kind for event in drain(intruder)] == [EventKind.ERROR]
    assert host.peer is guest


def test_close_notifies_only_the_peer(transport_pair: tuple[MemoryTransport, MemoryTransport]) -> None:
    host, guest = transport_pair
    host.open("room-1")
    guest.connect("room-1")
    drain(host)
    drain(guest)

    guest.close()
    assert drain(host) == [TransportEvent(EventKind.CLOSED)]
    assert drain(guest) == []
    assert not host.is_open

    host.close()
    # channel is free again
    newcomer = MemoryTransport(host.hub)
    newcomer.open("room-1")
    assert drain(newcomer) == []
