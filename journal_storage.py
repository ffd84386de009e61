"""
Trade Journal Storage - Key-Value Persistence for Profile and Options
======================================================================

Only two things outlive a session: the remembered user and the customized
form options. Both are JSON blobs stored under fixed keys in a simple
key-value store (get / set / remove). Trades and strategies are never
written here.

Stores:
- MemoryStore:   dict-backed, for tests and throwaway sessions
- JsonFileStore: one JSON file of {key: blob}, lock-file guarded,
                 written atomically (temp file + os.replace)

Persistence is best-effort: I/O failures are logged and swallowed, and a
blob that fails to parse is dropped in favor of the built-in default.

Version: 1.0.0 (2026-10-19)
"""

import json
import os
import sys
import time
from pathlib import Path
from typing import Any, Dict, Optional

from journal_models import FormOptions, User

# Cross-platform file locking
try:
    if sys.platform == 'win32':
        import msvcrt
    else:
        import fcntl
    FILE_LOCKING_AVAILABLE = True
except ImportError:
    FILE_LOCKING_AVAILABLE = False
    print("[storage] WARNING: File locking not available on this platform")


# =============================================================================
# CONSTANTS
# =============================================================================

USER_KEY = 'tradeJournalUser'
OPTIONS_KEY = 'tradeJournalOptions'

DEFAULT_DATA_DIR = "."
DEFAULT_STORE_FILE = "trade_journal_store.json"
DATA_DIR_SETTING = "TRADE_JOURNAL_DATA_DIR"
FILE_LOCK_TIMEOUT = 5.0


def resolve_data_dir() -> str:
    """Data directory from Streamlit secrets, then the environment, then cwd."""
    data_dir = ''
    try:
        import streamlit as st
        data_dir = str(st.secrets.get(DATA_DIR_SETTING, "") or "")
    except Exception:
        data_dir = ''
    if not data_dir:
        data_dir = os.environ.get(DATA_DIR_SETTING, "")
    return data_dir or DEFAULT_DATA_DIR


# =============================================================================
# FILE LOCKING CONTEXT MANAGER
# =============================================================================

class FileLock:
    """Cross-platform file locking context manager."""

    def __init__(self, file_path: Path, timeout: float = FILE_LOCK_TIMEOUT):
        self.file_path = file_path
        self.lock_path = file_path.with_suffix(file_path.suffix + '.lock')
        self.timeout = timeout
        self.lock_file = None
        self.locked = False

    def __enter__(self):
        if not FILE_LOCKING_AVAILABLE:
            return self

        start_time = time.time()
        while True:
            try:
                self.lock_file = open(self.lock_path, 'w')
                if sys.platform == 'win32':
                    msvcrt.locking(self.lock_file.fileno(), msvcrt.LK_NBLCK, 1)
                else:
                    fcntl.flock(self.lock_file.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
                self.locked = True
                return self
            except OSError:
                if self.lock_file:
                    self.lock_file.close()
                    self.lock_file = None
                if time.time() - start_time > self.timeout:
                    raise TimeoutError(f"Could not acquire lock for {self.file_path} within {self.timeout}s")
                time.sleep(0.1)

    def __exit__(self, exc_type, exc_val, exc_tb):
        if not FILE_LOCKING_AVAILABLE or not self.locked:
            return

        try:
            if sys.platform == 'win32':
                msvcrt.locking(self.lock_file.fileno(), msvcrt.LK_UNLCK, 1)
            else:
                fcntl.flock(self.lock_file.fileno(), fcntl.LOCK_UN)
            self.lock_file.close()
            self.locked = False
            if self.lock_path.exists():
                self.lock_path.unlink()
        except OSError as e:
            print(f"[storage] Error releasing lock: {e}")


# =============================================================================
# STORES
# =============================================================================

class KeyValueStore:
    """get / set / remove of string blobs."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = str(value)

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """All keys live in a single JSON object on disk."""

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path or Path(resolve_data_dir()) / DEFAULT_STORE_FILE)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with FileLock(self.path):
                with open(self.path, 'r') as f:
                    data = json.load(f)
        except TimeoutError:
            print(f"[storage] WARNING: Timeout acquiring lock for {self.path}, using empty store")
            return {}
        except (OSError, ValueError) as e:
            print(f"[storage] Error loading {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            print(f"[storage] WARNING: {self.path.name} contained {type(data).__name__}, ignoring")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Dict[str, str]) -> None:
        temp_path = self.path.with_suffix(self.path.suffix + '.tmp')
        try:
            with FileLock(self.path):
                with open(temp_path, 'w') as f:
                    json.dump(data, f, indent=2)
                os.replace(temp_path, self.path)
        except TimeoutError:
            print(f"[storage] ERROR: Timeout acquiring lock for {self.path}, save failed")
        except OSError as e:
            print(f"[storage] Error saving {self.path}: {e}")
        if temp_path.exists():
            try:
                temp_path.unlink()
            except OSError:
                pass

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = str(value)
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            data.pop(key)
            self._write(data)


# =============================================================================
# BLOB HELPERS
# =============================================================================

def _load_json(store: KeyValueStore, key: str) -> Optional[Any]:
    raw = store.get(key)
    if raw is None:
        return None
    return json.loads(raw)


def load_user(store: KeyValueStore) -> Optional[User]:
    """Remembered user, or None. A corrupt record is removed from the store."""
    try:
        data = _load_json(store, USER_KEY)
        if data is None:
            return None
        return User.from_dict(data)
    except (ValueError, TypeError) as e:
        print(f"[storage] Failed to parse saved user: {e}")
        store.remove(USER_KEY)
        return None


def save_user(store: KeyValueStore, user: User) -> None:
    store.set(USER_KEY, json.dumps(user.to_dict()))


def clear_user(store: KeyValueStore) -> None:
    store.remove(USER_KEY)


def has_saved_user(store: KeyValueStore) -> bool:
    return store.get(USER_KEY) is not None


def load_form_options(store: KeyValueStore) -> FormOptions:
    """Saved form options, or the defaults when missing or unreadable."""
    try:
        data = _load_json(store, OPTIONS_KEY)
        if data is None:
            return FormOptions()
        return FormOptions.from_dict(data)
    except (ValueError, TypeError) as e:
        print(f"[storage] Failed to parse saved options: {e}")
        store.remove(OPTIONS_KEY)
        return FormOptions()


def save_form_options(store: KeyValueStore, options: FormOptions) -> None:
    store.set(OPTIONS_KEY, json.dumps(options.to_dict()))


def clear_form_options(store: KeyValueStore) -> None:
    store.remove(OPTIONS_KEY)
