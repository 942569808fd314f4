# avn_nodebrew/matcher.py
from __future__ import annotations

from dataclasses import dataclass

from .manager import VersionManager
from .versioning import (
    greater_than,
    parse_versions,
    satisfies,
    version_name,
    version_number,
)


class NoMatchError(Exception):
    """No installed version satisfies the requested specifier"""

    def __init__(self, specifier: str) -> None:
        super().__init__(f"no version matching {specifier}")
        self.specifier = specifier


@dataclass(frozen=True)
class MatchResult:
    version: str
    command: str

    def to_dict(self) -> dict[str, str]:
        return {"version": self.version, "command": self.command}


def find_version(versions: list[str], matching: str) -> str | None:
    """
    Find the highest installed version matching a specifier like "node@^4.0.0".

    Names must be equal (after the iojs -> io alias) and the number must
    satisfy the npm range. On equal numbers the earliest entry wins.
    """
    m_name = version_name(matching)
    m_number = version_number(matching)

    highest: str | None = None
    for candidate in versions:
        if version_name(candidate) != m_name:
            continue
        c_number = version_number(candidate)
        if not satisfies(c_number, m_number):
            continue
        if highest is None or greater_than(c_number, version_number(highest)):
            highest = candidate
    return highest


def list_versions(manager: VersionManager | None = None) -> list[str]:
    manager = manager or VersionManager()
    return parse_versions(manager.list_output())


def installed_version(matching: str, manager: VersionManager | None = None) -> str | None:
    return find_version(list_versions(manager), matching)


def match(matching: str, manager: VersionManager | None = None) -> MatchResult:
    """
    Resolve a specifier against installed versions and build the
    activation command. The command is returned, not executed.

    Raises:
      ExternalToolError -> listing failed
      NoMatchError      -> listing worked but nothing satisfied the specifier
    """
    manager = manager or VersionManager()
    use = installed_version(matching, manager)
    if use is None:
        raise NoMatchError(matching)
    return MatchResult(version=use, command=manager.use_command(use))
