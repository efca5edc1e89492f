"""Persistent storage for settings and closed-page history."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Sequence

from dustman.autoclose.history import truncate_history
from dustman.autoclose.models import ClosedPageRecord, Settings
from dustman.config import DEFAULT_STATE_PATH
from dustman.exceptions import StateReadError, StateWriteError
from dustman.state.migrations import migrate_settings
from dustman.state.models import SessionState

logger = logging.getLogger(__name__)

SettingsListener = Callable[[Settings], None]


class BaseStateStore(ABC):
    """Key-value store holding a ``settings`` and a ``history`` document.

    Subclasses only provide raw document access; loading, defaults, legacy
    migration and change notification are shared. Backends that can be
    written by someone else (another process, another store instance)
    override :meth:`_signature` so that :meth:`refresh` and the next save
    can notice it.
    """

    def __init__(self) -> None:
        self._listeners: list[SettingsListener] = []
        self._lock = threading.Lock()
        self._seen_signature = None

    @abstractmethod
    def _read_document(self) -> dict:
        """Return the whole stored document. Raise StateReadError on failure."""
        ...

    @abstractmethod
    def _write_document(self, document: dict) -> None:
        """Replace the whole stored document. Raise StateWriteError on failure."""
        ...

    def _signature(self):
        """Changes whenever the stored document is replaced. None if untracked."""
        return None

    def load(self) -> SessionState:
        """Load state, falling back to defaults for anything missing or broken."""
        signature = self._signature()
        document = self._read_or_default()
        self._seen_signature = signature

        settings = _settings_from_document(document)
        raw_history = document.get("history")
        if not isinstance(raw_history, list):
            raw_history = []
        records = [ClosedPageRecord.from_dict(entry) for entry in raw_history]
        history = truncate_history(
            [record for record in records if record is not None],
            settings.max_history_size,
        )
        return SessionState(settings=settings, history=history)

    def save_settings(self, settings: Settings) -> None:
        """Persist settings and notify subscribers."""
        self._update(lambda document: document.update(settings=settings.to_dict()))
        self._notify(Settings.from_dict(settings.to_dict()))

    def save_history(self, history: Sequence[ClosedPageRecord]) -> None:
        records = [record.to_dict() for record in history]
        self._update(lambda document: document.update(history=records))

    def clear_history(self) -> None:
        self._update(lambda document: document.pop("history", None))

    def subscribe(self, listener: SettingsListener) -> None:
        """Call ``listener`` with the new settings after every change."""
        self._listeners.append(listener)

    def refresh(self) -> bool:
        """Notify subscribers if the document was replaced by someone else.

        Returns whether it was.
        """
        with self._lock:
            if self._signature() == self._seen_signature:
                return False
        settings = self.load().settings
        logger.info("Stored settings changed elsewhere, reloading")
        self._notify(settings)
        return True

    def _notify(self, settings: Settings) -> None:
        for listener in list(self._listeners):
            listener(settings)

    def _read_or_default(self) -> dict:
        try:
            document = self._read_document()
        except StateReadError as e:
            logger.warning("Could not load stored state, using defaults: %s", e)
            return {}
        if not isinstance(document, dict):
            logger.warning("Stored state is not an object, using defaults")
            return {}
        return document

    def _update(self, change: Callable[[dict], object]) -> None:
        with self._lock:
            changed_elsewhere = self._signature() != self._seen_signature
            document = self._read_or_default()
            external_settings = _settings_from_document(document) if changed_elsewhere else None
            change(document)
            self._write_document(document)
            self._seen_signature = self._signature()
        # Listeners may write back to this store; call them without the lock.
        if changed_elsewhere:
            logger.info("Stored settings changed elsewhere, reloading")
            self._notify(external_settings)


class MemoryStateStore(BaseStateStore):
    """State kept in a dict; nothing survives the process."""

    def __init__(self, document: dict | None = None) -> None:
        super().__init__()
        self.document: dict = document if document is not None else {}

    def _read_document(self) -> dict:
        return json.loads(json.dumps(self.document))

    def _write_document(self, document: dict) -> None:
        self.document = json.loads(json.dumps(document))


class JsonFileStateStore(BaseStateStore):
    """State kept in a single JSON file, replaced atomically on every write."""

    def __init__(self, path: Path | None = None) -> None:
        super().__init__()
        self.path = Path(path) if path is not None else DEFAULT_STATE_PATH
        self._seen_signature = self._signature()

    def _signature(self):
        # os.replace gives every write a new inode
        try:
            st = self.path.stat()
        except FileNotFoundError:
            return None
        return (st.st_ino, st.st_mtime_ns, st.st_size)

    def _read_document(self) -> dict:
        if not self.path.exists():
            logger.info("No stored state at %s", self.path)
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise StateReadError(f"Failed reading {self.path}: {e}") from e

    def _write_document(self, document: dict) -> None:
        tmp_path: Path | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=".state-",
                suffix=".json",
                delete=False,
            ) as tmp:
                tmp_path = Path(tmp.name)
                json.dump(document, tmp, indent=2)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise StateWriteError(f"Failed writing {self.path}: {e}") from e


def persist_history(
    store: BaseStateStore,
    settings: Settings,
    history: Sequence[ClosedPageRecord],
) -> None:
    """Save history, or remove it from storage when it must not outlive the session."""
    if settings.clear_history_on_exit:
        store.clear_history()
    else:
        store.save_history(history)


def _settings_from_document(document: dict) -> Settings:
    raw_settings = document.get("settings")
    if not isinstance(raw_settings, dict):
        raw_settings = {}
    return Settings.from_dict(migrate_settings(raw_settings))
