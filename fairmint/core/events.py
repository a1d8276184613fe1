"""
FairMint Event Log

Append-only record of emitted events. Events emitted by a call that later
fails are discarded by truncating back to the mark taken on entry.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional


@dataclass(frozen=True)
class Event:
    """A named event with its arguments."""
    name: str
    args: Dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.args[key]


class EventLog:
    """Ordered list of events emitted by one contract-like object."""

    def __init__(self):
        self._events: List[Event] = []

    def emit(self, name: str, **args: Any) -> Event:
        event = Event(name=name, args=args)
        self._events.append(event)
        return event

    def filter(self, name: str) -> List[Event]:
        return [e for e in self._events if e.name == name]

    def last(self, name: Optional[str] = None) -> Optional[Event]:
        for event in reversed(self._events):
            if name is None or event.name == name:
                return event
        return None

    def mark(self) -> int:
        return len(self._events)

    def truncate(self, mark: int) -> None:
        del self._events[mark:]

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(list(self._events))
