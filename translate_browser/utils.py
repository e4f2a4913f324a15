import re
from typing import Tuple

_CODE_RE = re.compile(r"[A-Za-z]{1,3}[0-9]+")


def safe_call(func, *args, **kwargs):
    """Safely call a widget helper, ignoring exceptions."""
    try:
        return func(*args, **kwargs)
    except Exception:
        pass
    return None


def split_extension(name: str) -> Tuple[str, str]:
    """Split ``name`` at its last dot: ``("report", ".txt")``.

    Only the final dot counts (``archive.tar.gz`` keeps ``archive.tar``), and a
    leading dot belongs to the extension, leaving an empty stem.
    """
    idx = name.rfind(".")
    if idx < 0:
        return name, ""
    return name[:idx], name[idx:]


def contains_letters(text: str) -> bool:
    return any(("a" <= ch <= "z") or ("A" <= ch <= "Z") for ch in text)


def is_code_like(stem: str) -> bool:
    """True for a short letter prefix followed by digits: ``xyz123``, ``IMG0042``.

    Longer words with a trailing number (``chapter1``, ``Photos2023``) are not codes.
    """
    return bool(_CODE_RE.fullmatch(stem))


def is_translatable_stem(stem: str) -> bool:
    if len(stem) <= 1:
        return False
    if not contains_letters(stem):
        return False
    return not is_code_like(stem)
