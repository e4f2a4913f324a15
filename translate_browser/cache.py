from __future__ import annotations

import threading
from typing import Dict, Optional


class _ReadWriteLock:
    """Many readers or one writer.

    Writers announce themselves before waiting; new readers queue behind a
    waiting writer, so neither side can be starved indefinitely.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer_active = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer_active or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer_active or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer_active = True

    def release_write(self) -> None:
        with self._cond:
            self._writer_active = False
            self._cond.notify_all()


class TranslationCache:
    """Process-wide memo of ``name -> translation``; never evicted, never persisted."""

    def __init__(self) -> None:
        self._lock = _ReadWriteLock()
        self._data: Dict[str, str] = {}

    def get(self, name: str) -> Optional[str]:
        self._lock.acquire_read()
        try:
            return self._data.get(name)
        finally:
            self._lock.release_read()

    def set(self, name: str, value: str) -> None:
        self._lock.acquire_write()
        try:
            self._data[name] = value
        finally:
            self._lock.release_write()

    def snapshot(self) -> Dict[str, str]:
        self._lock.acquire_read()
        try:
            return dict(self._data)
        finally:
            self._lock.release_read()

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return self.get(name) is not None

    def __len__(self) -> int:
        self._lock.acquire_read()
        try:
            return len(self._data)
        finally:
            self._lock.release_read()
