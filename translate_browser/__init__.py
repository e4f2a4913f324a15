"""Terminal file browser that proposes French names for English files."""

from .version import __version__

__all__ = ["__version__"]
