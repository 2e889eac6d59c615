"""
Contract for the peer-to-peer channel, plus an in-memory implementation.

The channel is assumed to be reliable and ordered once open. Events (opened, data, closed, error) are not
delivered through callbacks: the transport puts them on its `events` queue and the session drains it.
"""

import logging
import queue
from dataclasses import dataclass
from enum import StrEnum
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class EventKind(StrEnum):
    OPENED = "opened"
    DATA = "data"
    CLOSED = "closed"
    ERROR = "error"


@dataclass(frozen=True)
class TransportEvent:
    kind: EventKind
    data: Optional[str] = None
    reason: Optional[str] = None


class Transport(Protocol):
    """Connection to exactly one peer."""

    events: "queue.Queue[TransportEvent]"

    def open(self, channel_id: str) -> None:
        """Host side: claim the named channel and wait for a peer to attach."""
        ...

    def connect(self, channel_id: str) -> None:
        """Guest side: dial the named channel."""
        ...

    def send(self, data: str) -> bool:
        """Deliver one message to the peer. False if the channel is not open."""
        ...

    def close(self) -> None:
        """Hang up. The peer sees a `closed` event, this side does not."""
        ...


class MemoryHub:
    """Rendezvous point for MemoryTransports living in the same process."""

    def __init__(self) -> None:
        self._channels: dict[str, "MemoryTransport"] = {}

    def register(self, channel_id: str, transport: "MemoryTransport") -> bool:
        if channel_id in self._channels:
            return False
        self._channels[channel_id] = transport
        return True

    def unregister(self, channel_id: str, transport: "MemoryTransport") -> None:
        if self._channels.get(channel_id) is transport:
            del self._channels[channel_id]

    def lookup(self, channel_id: str) -> Optional["MemoryTransport"]:
        return self._channels.get(channel_id)


class MemoryTransport:
    """In-process transport: delivers every message, in order, to the linked peer's queue."""

    def __init__(self, hub: MemoryHub) -> None:
        self.hub = hub
        self.events: queue.Queue[TransportEvent] = queue.Queue()
        self.channel_id: Optional[str] = None
        self.peer: Optional["MemoryTransport"] = None

    @property
    def is_open(self) -> bool:
        return self.peer is not None

    def open(self, channel_id: str) -> None:
        self.close()
        if not self.hub.register(channel_id, self):
            self._error(f"Channel {channel_id!r} is already taken.")
            return
        self.channel_id = channel_id
        logger.debug("Listening on channel %s", channel_id)

    def connect(self, channel_id: str) -> None:
        self.close()
        host = self.hub.lookup(channel_id)
        if host is None:
            self._error(f"Could not connect to peer on channel {channel_id!r}.")
            return
        if host.is_open:
            self._error(f"Channel {channel_id!r} already has a peer attached.")
            return

        self.channel_id = channel_id
        self.peer = host
        host.peer = self
        host.events.put(TransportEvent(EventKind.OPENED))
        self.events.put(TransportEvent(EventKind.OPENED))

    def send(self, data: str) -> bool:
        if self.peer is None:
            return False
        self.peer.events.put(TransportEvent(EventKind.DATA, data=data))
        return True

    def close(self) -> None:
        peer = self.peer
        self.peer = None
        if peer is not None:
            peer.peer = None
            peer.events.put(TransportEvent(EventKind.CLOSED))
        if self.channel_id is not None:
            self.hub.unregister(self.channel_id, self)
            self.channel_id = None

    def _error(self, reason: str) -> None:
        logger.warning(reason)
        self.events.put(TransportEvent(EventKind.ERROR, reason=reason))
