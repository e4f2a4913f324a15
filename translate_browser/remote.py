"""Remote lookup collaborator and the one place its faults are contained."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

import requests

from .config import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT
from .debug import get_logger


class RemoteLookupError(RuntimeError):
    """The remote service answered, but not with a usable translation."""


class RemoteTranslator(Protocol):
    def translate(self, text: str, source: str, target: str) -> str:
        ...


@dataclass(frozen=True)
class LookupOutcome:
    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.text)


def fetch_translation(translator: RemoteTranslator, text: str, source: str, target: str) -> LookupOutcome:
    """Call ``translator`` and fold every fault into a failed outcome."""
    try:
        result = translator.translate(text, source, target)
    except Exception as exc:
        get_logger("remote").debug("lookup failed for %r: %s: %s", text, type(exc).__name__, exc)
        return LookupOutcome(error=f"{type(exc).__name__}: {exc}")
    if not isinstance(result, str) or not result.strip():
        return LookupOutcome(error="empty translation")
    return LookupOutcome(text=result)


class GoogleTranslator:
    """Client for the public ``translate_a/single`` endpoint."""

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        self._session = session or requests.Session()

    def translate(self, text: str, source: str, target: str) -> str:
        params = {"client": "gtx", "sl": source, "tl": target, "dt": "t", "q": text}
        try:
            resp = self._session.get(self.endpoint, params=params, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise RemoteLookupError(str(exc)) from exc
        try:
            payload = resp.json()
        except ValueError as exc:
            raise RemoteLookupError(f"malformed response: {exc}") from exc
        return _join_segments(payload)

    def close(self) -> None:
        self._session.close()


def _join_segments(payload: Any) -> str:
    # Shape: [[["<translated>", "<original>", ...], ...], ...]
    if not isinstance(payload, list) or not payload or not isinstance(payload[0], list):
        raise RemoteLookupError("unexpected response shape")
    parts = []
    for segment in payload[0]:
        if isinstance(segment, list) and segment and isinstance(segment[0], str):
            parts.append(segment[0])
    text = "".join(parts).strip()
    if not text:
        raise RemoteLookupError("response carried no translation")
    return text


class OfflineTranslator:
    def translate(self, text: str, source: str, target: str) -> str:
        raise RemoteLookupError("remote lookup disabled")
