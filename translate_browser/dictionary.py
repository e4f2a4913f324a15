from __future__ import annotations

import json
from types import MappingProxyType
from typing import Dict, Mapping, Optional

# Common folder names that never need a network round trip.
STATIC_TRANSLATIONS: Mapping[str, str] = MappingProxyType({
    "Desktop": "Bureau",
    "Documents": "Documents",
    "Downloads": "Téléchargements",
    "Pictures": "Images",
    "Music": "Musique",
    "Videos": "Vidéos",
    "Home": "Accueil",
    "Folder": "Dossier",
    "File": "Fichier",
    "Public": "Public",
    "Templates": "Modèles",
    "Library": "Bibliothèque",
    "Applications": "Applications",
    "Movies": "Films",
    "bin": "binaire",
    "src": "source",
    "pkg": "paquets",
    "tmp": "temporaire",
    "opt": "optionnel",
    "usr": "utilisateur",
    "var": "variable",
    "etc": "configuration",
})


class DictionaryError(ValueError):
    """Raised when an extra dictionary file cannot be used."""


class StaticDictionary:
    """Read-only name lookup with exact and case-insensitive matching."""

    def __init__(self, entries: Optional[Mapping[str, str]] = None) -> None:
        source = STATIC_TRANSLATIONS if entries is None else entries
        self._exact: Mapping[str, str] = MappingProxyType(dict(source))
        folded: Dict[str, str] = {}
        for key, value in self._exact.items():
            # First spelling wins when two keys differ only by case.
            folded.setdefault(key.casefold(), value)
        self._folded: Mapping[str, str] = MappingProxyType(folded)

    def exact(self, name: str) -> Optional[str]:
        return self._exact.get(name)

    def insensitive(self, name: str) -> Optional[str]:
        return self._folded.get(name.casefold())

    def __len__(self) -> int:
        return len(self._exact)

    def __contains__(self, name: object) -> bool:
        return name in self._exact


def load_dictionary(path: Optional[str] = None) -> StaticDictionary:
    """Return the built-in dictionary, optionally extended by a JSON file.

    The file must hold a single object of string keys to string values;
    its pairs override built-in ones with the same key.
    """
    entries: Dict[str, str] = dict(STATIC_TRANSLATIONS)
    if not path:
        return StaticDictionary(entries)
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except OSError as exc:
        raise DictionaryError(f"cannot read dictionary '{path}': {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DictionaryError(f"invalid JSON in dictionary '{path}': {exc}") from exc
    if not isinstance(payload, dict):
        raise DictionaryError(f"dictionary '{path}' must contain a JSON object")
    for key, value in payload.items():
        if not isinstance(value, str) or not value:
            raise DictionaryError(f"dictionary '{path}': value for '{key}' must be a non-empty string")
        entries[key] = value
    return StaticDictionary(entries)
