# avn_nodebrew/versioning.py
from __future__ import annotations

import re

import semantic_version

VERSION_REGEX = re.compile(r"(\w+)(?:-|@)(.+)")
STOP_REGEX = re.compile(r"^current:\s+")
COMPARATOR_PREFIX = re.compile(r"(?<![^\s|])(<=|>=|<|>|\^|~|=)?\s*=?v?(?=[0-9xX*])")


def version_name(version: str) -> str | None:
    """
    Extract the runtime name from an identifier:
      "node@4.2.0" -> "node"
      "io-2.3.0" -> "io"
      "iojs@1.0.0" -> "io"
      "4.2.0" -> None
    """
    match = VERSION_REGEX.search(version)
    name = match.group(1) if match else None
    if name == "iojs":
        name = "io"
    return name


def version_number(version: str) -> str:
    """
    Extract the version number from an identifier.
    Without a separator the whole identifier is the number.
    """
    match = VERSION_REGEX.search(version)
    return match.group(2) if match else version


def parse_versions(raw: str) -> list[str]:
    """
    Turn raw `nodebrew list` output into identifiers.

    Reading stops at the first empty line or at the `current:` line, so
    anything printed after those is not an installed version.
    """
    versions: list[str] = []
    for line in raw.split("\n"):
        if not line or STOP_REGEX.match(line):
            break
        versions.append(line.strip())
    return versions


def parse_semver(number: str) -> semantic_version.Version | None:
    # nodebrew prints "v4.2.0"; accept the loose prefixes node-semver does
    cleaned = number.strip().lstrip("=v").strip()
    if not cleaned:
        return None
    try:
        return semantic_version.Version(cleaned)
    except ValueError:
        return None


def normalize_range(spec: str) -> str:
    """
    Loosen a range the way node-semver does before NpmSpec sees it:
      ">= 4" -> ">=4"
      "^v4.0.0" -> "^4.0.0"
      "~>4" -> "~4"
    """
    cleaned = spec.strip().replace("~>", "~")
    cleaned = re.sub(r"\s+", " ", cleaned)
    return COMPARATOR_PREFIX.sub(lambda m: m.group(1) or "", cleaned)


def parse_range(spec: str) -> semantic_version.NpmSpec | None:
    try:
        return semantic_version.NpmSpec(normalize_range(spec))
    except ValueError:
        return None


def satisfies(number: str, spec: str) -> bool:
    """
    npm range check. Unparseable numbers or ranges never satisfy.
    """
    version = parse_semver(number)
    if version is None:
        return False
    npm_spec = parse_range(spec)
    if npm_spec is None:
        return False
    return npm_spec.match(version)


def greater_than(lhs: str, rhs: str) -> bool:
    left = parse_semver(lhs)
    right = parse_semver(rhs)
    if left is None or right is None:
        return False
    return left > right
