"""gitxray - inspect the loose objects and reflog of a git repository."""

from __future__ import annotations

__version__ = "0.1.0"
