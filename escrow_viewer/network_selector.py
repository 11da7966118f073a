"""
Persisted testnet/mainnet selection.
The selection lives in memory; the store only remembers it between sessions.
"""

import json
import logging
import os
from typing import Callable, Protocol

from escrow_viewer.network import DEFAULT_STATE_PATH, NetworkType, get_default_network, is_network, normalize_network

log = logging.getLogger("escrow_viewer")

STORAGE_KEY = "escrow-viewer-network"


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryStore:
    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore:
    """Flat string map kept in a JSON file. Missing file reads as empty."""

    def __init__(self, path: str | None = None):
        self.path = path or DEFAULT_STATE_PATH

    def _load(self) -> dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._load()
        except ValueError as e:
            log.warning("Discarding unreadable state file %s: %s", self.path, e)
            data = {}
        data[key] = value
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        tmp = self.path + ".tmp"
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise


class NetworkSelector:
    """
    Current network plus synchronous change notification.
    Storage errors are logged and ignored; the in-memory value is authoritative.
    """

    def __init__(self, store: KeyValueStore, default: NetworkType | None = None):
        self._store = store
        self._current: NetworkType = normalize_network(default) if default else get_default_network()
        self._observers: list[Callable[[NetworkType], None]] = []
        try:
            saved = store.get(STORAGE_KEY)
            if is_network(saved):
                self._current = saved  # type: ignore[assignment]
        except Exception as e:
            log.warning("Failed to read network preference: %s", e)

    def current(self) -> NetworkType:
        return self._current

    def set_network(self, network: str) -> None:
        new = normalize_network(network)
        changed = new != self._current
        self._current = new
        try:
            self._store.set(STORAGE_KEY, new)
        except Exception as e:
            log.warning("Failed to save network preference: %s", e)
        if changed:
            log.info("Network switched to %s", new)
            for callback in list(self._observers):
                callback(new)

    def toggle(self) -> None:
        self.set_network("mainnet" if self._current == "testnet" else "testnet")

    def subscribe(self, callback: Callable[[NetworkType], None]) -> Callable[[], None]:
        """Call callback(network) after every change. Returns a function that unsubscribes."""
        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe
