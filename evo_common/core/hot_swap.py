"""Atomically swappable holder for the current configuration.

A process keeps one ``SharedConfig`` per document it serves. Readers call
``current()`` and keep the returned snapshot for as long as they need a
consistent view; a config update builds a whole new value and swaps it in.
Values are frozen models, so nothing is ever mutated in place.
"""

import logging
import threading
from collections.abc import Callable
from typing import Generic, Protocol, TypeVar


logger = logging.getLogger(__name__)


class HashableConfig(Protocol):
    def config_hash(self) -> str: ...


C = TypeVar("C", bound=HashableConfig)

Listener = Callable[[C, C], None]


class SharedConfig(Generic[C]):
    """Holds the current snapshot of a configuration value."""

    def __init__(self, initial: C, name: str = "config"):
        """Initialize with the configuration loaded at startup."""
        self.name = name
        self._value = initial
        self._lock = threading.Lock()
        self._listeners: list[Listener] = []

    def current(self) -> C:
        """Return the current snapshot."""
        return self._value

    def current_hash(self) -> str:
        """Hash of the current snapshot, as announced in config updates."""
        return self._value.config_hash()

    def swap(self, new: C) -> C:
        """Replace the snapshot wholesale and return the previous one."""
        with self._lock:
            previous = self._value
            self._value = new
            listeners = list(self._listeners)

        self._notify(listeners, previous, new)
        return previous

    def swap_if_changed(self, new: C) -> bool:
        """Swap only when ``new`` hashes differently from the current value.

        Returns:
            True if the snapshot was replaced

        """
        with self._lock:
            previous = self._value
            if previous.config_hash() == new.config_hash():
                return False
            self._value = new
            listeners = list(self._listeners)

        self._notify(listeners, previous, new)
        return True

    def subscribe(self, listener: Listener) -> None:
        """Call ``listener(previous, new)`` after every swap."""
        with self._lock:
            self._listeners.append(listener)

    def _notify(self, listeners: list[Listener], previous: C, new: C) -> None:
        logger.info(f"Swapped {self.name} to {new.config_hash()[:12]}")
        for listener in listeners:
            listener(previous, new)
