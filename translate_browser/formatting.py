from __future__ import annotations

import os

FILE_TAG = "Fichier"
DIRECTORY_TAG = "Dossier"
PENDING_MARK = "..."
ARROW = "→"


def type_tag(is_dir: bool) -> str:
    return DIRECTORY_TAG if is_dir else FILE_TAG


def format_label(is_dir: bool, translation: str) -> str:
    """Return the description line shown under an entry, e.g. ``Dossier → Bureau``."""
    return f"{type_tag(is_dir)} {ARROW} {translation}"


def format_pending_label(is_dir: bool) -> str:
    return format_label(is_dir, PENDING_MARK)


def format_title(path: str) -> str:
    return f"Navigateur de fichiers - {path}"


def format_rename_success(source: str, destination: str) -> str:
    return f"✓ Renommé: {os.path.basename(source)} {ARROW} {os.path.basename(destination)}"


def format_error(detail: object) -> str:
    return f"✗ Erreur: {detail}"
