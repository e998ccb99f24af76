"""Shared test fixtures: an in-memory lint engine and a project tree builder."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

import pytest


class FakeEngine:
    """
    LintEngine stand-in keyed by root-relative POSIX paths.

    ``rules`` applies to every file unless ``per_file`` has an entry for it,
    which mimics ESLint overrides.
    """

    def __init__(
        self,
        root: Path,
        rules: Optional[Mapping[str, Any]] = None,
        per_file: Optional[Dict[str, Mapping[str, Any]]] = None,
        ignored: Iterable[str] = (),
    ) -> None:
        self.root = root.resolve()
        self.rules = dict(rules or {})
        self.per_file = per_file or {}
        self.ignored = set(ignored)
        self.ignore_calls: List[Path] = []
        self.config_calls: List[Path] = []

    def _rel(self, path: Path) -> str:
        return path.relative_to(self.root).as_posix()

    async def is_path_ignored(self, path: Path) -> bool:
        self.ignore_calls.append(path)
        return self._rel(path) in self.ignored

    async def calculate_rules_for_file(self, path: Path) -> Mapping[str, Any]:
        self.config_calls.append(path)
        return self.per_file.get(self._rel(path), self.rules)


@pytest.fixture
def make_engine() -> Callable[..., FakeEngine]:
    return FakeEngine


@pytest.fixture
def project(tmp_path) -> Callable[[Dict[str, str]], Path]:
    """Write {relative_path: content} under tmp_path and return the root."""

    def _write(files: Dict[str, str]) -> Path:
        for rel, content in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return tmp_path.resolve()

    return _write
