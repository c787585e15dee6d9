"""Document store boundary.

The scoring core reads and writes three collections:

    config   - one document, key 'league'
    matches  - one document per match, key 'w{week}_m{index}'
    rounds   - one document per player, key playerId, shape {'rounds': [...]}

Writes are merges. Status transitions go through ``compare_and_set`` so a
transition only lands if the document still has the status it was read with.
"""

import copy
import logging
import threading
from collections import defaultdict
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Protocol

from .context import LeagueContext
from .exceptions import PersistenceError, StaleDocument
from .utils import load_json_safe, sanitize_document, save_json

logger = logging.getLogger('golfleague.store')

CONFIG = 'config'
MATCHES = 'matches'
ROUNDS = 'rounds'
LEAGUE_KEY = 'league'

Snapshot = dict[str, dict[str, Any]]
Listener = Callable[[Snapshot], None]


class DocumentStore(Protocol):
    """What the core needs from persistence."""

    def get(self, collection: str, key: str) -> Optional[dict]: ...

    def list(self, collection: str) -> Snapshot: ...

    def merge(self, collection: str, key: str, patch: dict) -> dict: ...

    def update(self, collection: str, key: str, fn: Callable[[Optional[dict]], dict]) -> dict: ...

    def compare_and_set(
        self, collection: str, key: str, field: str, expected: Iterable[Any], patch: dict
    ) -> dict: ...

    def subscribe(self, collection: str, listener: Listener) -> Callable[[], None]: ...


class BaseDocumentStore:
    """
    Locking and change notification shared by the concrete stores.

    Subclasses provide ``_read(collection)`` and ``_write(collection, key, doc)``.
    Every read-modify-write holds a per-document lock.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[tuple[str, str], threading.RLock] = {}
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def _read(self, collection: str) -> Snapshot:
        raise NotImplementedError

    def _write(self, collection: str, key: str, doc: dict) -> None:
        raise NotImplementedError

    def _lock_for(self, collection: str, key: str) -> threading.RLock:
        with self._guard:
            return self._locks.setdefault((collection, key), threading.RLock())

    def get(self, collection: str, key: str) -> Optional[dict]:
        doc = self._read(collection).get(key)
        return copy.deepcopy(doc) if doc is not None else None

    def list(self, collection: str) -> Snapshot:
        return copy.deepcopy(self._read(collection))

    def update(self, collection: str, key: str, fn: Callable[[Optional[dict]], dict]) -> dict:
        """Atomically replace a document with ``fn(current)``."""
        with self._lock_for(collection, key):
            new_doc = sanitize_document(fn(self.get(collection, key)))
            try:
                self._write(collection, key, new_doc)
            except OSError as e:
                logger.error(f'Write failed for {collection}/{key}: {e}')
                raise PersistenceError('write', collection, key, new_doc) from e
        self._notify(collection)
        return copy.deepcopy(new_doc)

    def merge(self, collection: str, key: str, patch: dict) -> dict:
        return self.update(collection, key, lambda doc: {**(doc or {}), **patch})

    def compare_and_set(
        self, collection: str, key: str, field: str, expected: Iterable[Any], patch: dict
    ) -> dict:
        """
        Merge ``patch`` only if ``doc[field]`` is one of ``expected``.

        Raises:
            StaleDocument: If the current value is not one of ``expected``
        """
        expected = tuple(expected)

        def apply(doc):
            actual = (doc or {}).get(field)
            if actual not in expected:
                raise StaleDocument(collection, key, field, expected, actual)
            return {**(doc or {}), **patch}

        return self.update(collection, key, apply)

    def subscribe(self, collection: str, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with a full snapshot after every write to ``collection``."""
        self._listeners[collection].append(listener)

        def unsubscribe():
            if listener in self._listeners[collection]:
                self._listeners[collection].remove(listener)

        return unsubscribe

    def _notify(self, collection: str) -> None:
        listeners = list(self._listeners.get(collection, []))
        if not listeners:
            return
        snapshot = self.list(collection)
        for listener in listeners:
            listener(snapshot)


class MemoryDocumentStore(BaseDocumentStore):
    """In-process store; useful for tests and for scoring a snapshot."""

    def __init__(self, initial: Optional[dict[str, Snapshot]] = None):
        super().__init__()
        self._data: dict[str, Snapshot] = defaultdict(dict)
        for collection, docs in (initial or {}).items():
            self._data[collection] = copy.deepcopy(docs)

    def _read(self, collection: str) -> Snapshot:
        return self._data[collection]

    def _write(self, collection: str, key: str, doc: dict) -> None:
        self._data[collection][key] = copy.deepcopy(doc)


class JsonDocumentStore(BaseDocumentStore):
    """
    One JSON file per collection under a data directory.

    Example:
        store = JsonDocumentStore('data/league_2026')
        store.merge('config', 'league', {'absentRule': 'worst_score'})
    """

    def __init__(self, root: Path | str):
        super().__init__()
        self.root = Path(root)
        self._file_locks: dict[str, threading.Lock] = defaultdict(threading.Lock)

    def _path(self, collection: str) -> Path:
        return self.root / f'{collection}.json'

    def _read(self, collection: str) -> Snapshot:
        return load_json_safe(self._path(collection), default={}) or {}

    def _write(self, collection: str, key: str, doc: dict) -> None:
        with self._file_locks[collection]:
            docs = self._read(collection)
            docs[key] = doc
            save_json(self._path(collection), docs)


def load_context(store: DocumentStore) -> LeagueContext:
    """Build a league snapshot from the store's current documents."""
    return LeagueContext.from_documents(
        store.get(CONFIG, LEAGUE_KEY) or {},
        store.list(MATCHES),
        store.list(ROUNDS),
    )
