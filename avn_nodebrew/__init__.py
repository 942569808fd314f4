# avn_nodebrew/__init__.py
from __future__ import annotations

__version__ = "0.3.0"

from .matcher import MatchResult, NoMatchError, find_version, match  # noqa: E402
from .manager import ExternalToolError, VersionManager  # noqa: E402

name = "avn-nodebrew"

__all__ = [
    "ExternalToolError",
    "MatchResult",
    "NoMatchError",
    "VersionManager",
    "__version__",
    "find_version",
    "match",
    "name",
]
