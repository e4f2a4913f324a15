"""Runtime settings: built-in defaults, then environment, then command line."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

SOURCE_LANG = "en"
TARGET_LANG = "fr"
DEFAULT_ENDPOINT = "https://translate.googleapis.com/translate_a/single"
DEFAULT_TIMEOUT = 10.0

ENDPOINT_ENV = "TRANSLATE_BROWSER_ENDPOINT"
TIMEOUT_ENV = "TRANSLATE_BROWSER_TIMEOUT"
OFFLINE_ENV = "TRANSLATE_BROWSER_OFFLINE"
DEBUG_ENV = "TRANSLATE_BROWSER_DEBUG"

TRUTHY = {"1", "true", "yes", "on", "debug"}


def default_start_path() -> str:
    try:
        home = os.path.expanduser("~")
    except Exception:
        return "."
    if not home or home == "~" or not os.path.isdir(home):
        return "."
    return home


@dataclass(frozen=True)
class BrowserConfig:
    start_path: str
    source_lang: str = SOURCE_LANG
    target_lang: str = TARGET_LANG
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT
    remote_enabled: bool = True
    dictionary_path: Optional[str] = None
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BrowserConfig":
        """Build defaults overlaid with ``TRANSLATE_BROWSER_*`` variables.

        Malformed values are ignored rather than treated as errors.
        """
        env = os.environ if environ is None else environ
        timeout = DEFAULT_TIMEOUT
        raw_timeout = env.get(TIMEOUT_ENV, "").strip()
        if raw_timeout:
            try:
                parsed = float(raw_timeout)
            except ValueError:
                parsed = 0.0
            if parsed > 0:
                timeout = parsed
        return cls(
            start_path=default_start_path(),
            endpoint=env.get(ENDPOINT_ENV, "").strip() or DEFAULT_ENDPOINT,
            timeout=timeout,
            remote_enabled=env.get(OFFLINE_ENV, "0").lower() not in TRUTHY,
            debug=env.get(DEBUG_ENV, "0").lower() in TRUTHY,
        )

    def with_overrides(
        self,
        *,
        start_path: Optional[str] = None,
        dictionary_path: Optional[str] = None,
        timeout: Optional[float] = None,
        offline: bool = False,
        debug: bool = False,
    ) -> "BrowserConfig":
        """Apply command-line values on top; ``None``/``False`` keep the current value."""
        cfg = self
        if start_path:
            cfg = replace(cfg, start_path=os.path.abspath(start_path))
        if dictionary_path:
            cfg = replace(cfg, dictionary_path=dictionary_path)
        if timeout is not None and timeout > 0:
            cfg = replace(cfg, timeout=timeout)
        if offline:
            cfg = replace(cfg, remote_enabled=False)
        if debug:
            cfg = replace(cfg, debug=True)
        return cfg
