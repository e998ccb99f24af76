"""
Shell-glob matching for scan-root-relative paths.

Patterns are matched one ``/`` segment at a time against POSIX-style
relative paths. Within a segment ``*``, ``?`` and ``[...]`` behave as in
fnmatch and never cross ``/``; a ``**`` segment matches zero or more whole
segments, so ``**/*.test.ts`` matches ``a.test.ts`` at the root and
``src/*.js`` does not match ``src/deep/b.js``. A pattern ending in ``/``
matches everything below that directory. Matching is case-sensitive.
"""

from __future__ import annotations

from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Sequence


def to_relative_posix(path: Path, root: Path) -> str:
    """Return path relative to root with forward slashes."""
    return path.relative_to(root).as_posix()


def _match_segments(parts: Sequence[str], pattern_parts: Sequence[str]) -> bool:
    if not pattern_parts:
        return not parts
    head, rest = pattern_parts[0], pattern_parts[1:]
    if head == "**":
        return any(_match_segments(parts[i:], rest) for i in range(len(parts) + 1))
    return bool(parts) and fnmatchcase(parts[0], head) and _match_segments(parts[1:], rest)


def glob_match(rel_path: str, pattern: str) -> bool:
    """
    Check a relative POSIX path against a single glob pattern.

    Examples:
        >>> glob_match("src/legacy/a.js", "src/legacy/**")
        True
        >>> glob_match("a.test.ts", "**/*.test.ts")
        True
        >>> glob_match("src/deep/b.js", "src/*.js")
        False
    """
    pattern = pattern.strip()
    if not pattern:
        return False
    if pattern.startswith("./"):
        pattern = pattern[2:]
    if pattern.endswith("/"):
        pattern += "**"
    return _match_segments(rel_path.split("/"), pattern.split("/"))


def matches_any(rel_path: str, patterns: Iterable[str]) -> bool:
    """True if rel_path matches at least one of patterns."""
    return any(glob_match(rel_path, p) for p in patterns)
