"""
Lint-engine boundary: effective rule config and ignore checks for a file.

The scanner never resolves ESLint configuration itself. It asks a LintEngine
two questions per file ("is this path ignored?" and "what are the effective
rules?") and interprets the answers:

- ``parse_rule_entry`` turns a raw rule entry (``2``, ``"warn"``,
  ``["error", {...}]``) into a BareSeverity or SeverityWithOptions.
- ``normalize_severity`` collapses that to a Severity right away, so nothing
  past ConfigResolver ever sees the raw shape.

ESLintEngine is the production engine. It shells out to Node.js and loads the
project's own ``eslint`` package, so whatever ESLint version and plugins the
project has installed are the ones that decide. One Node process answers a
whole batch of paths.

Typical usage:
    engine = ESLintEngine(root, ConfigMode.FLAT)
    resolver = ConfigResolver(engine)
    severity = await resolver.severity_for(path, "no-console")
"""

from __future__ import annotations

import asyncio
import json
import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple, Union

from disable_scanner.config import DEFAULT_NODE_EXECUTABLE, ConfigMode
from disable_scanner.errors import LintEngineError
from disable_scanner.findings.models import Severity

logger = logging.getLogger(__name__)


class LintEngine(Protocol):
    """What the scanner needs from ESLint. Both calls take absolute paths."""

    async def is_path_ignored(self, path: Path) -> bool: ...

    async def calculate_rules_for_file(self, path: Path) -> Mapping[str, Any]: ...


@dataclass(frozen=True)
class BareSeverity:
    token: Any


@dataclass(frozen=True)
class SeverityWithOptions:
    token: Any
    options: tuple


RuleEntry = Union[BareSeverity, SeverityWithOptions]

_SEVERITY_TOKENS: Dict[Any, Severity] = {
    "off": Severity.OFF,
    "warn": Severity.WARNING,
    "error": Severity.ERROR,
    0: Severity.OFF,
    1: Severity.WARNING,
    2: Severity.ERROR,
}


def parse_rule_entry(raw: Any) -> Optional[RuleEntry]:
    """Return the tagged form of a raw rule entry, or None when unconfigured."""
    if raw is None:
        return None
    if isinstance(raw, (list, tuple)):
        if not raw:
            return None
        return SeverityWithOptions(token=raw[0], options=tuple(raw[1:]))
    return BareSeverity(token=raw)


def normalize_severity(entry: Optional[RuleEntry]) -> Severity:
    """
    Collapse a rule entry to OFF, WARNING or ERROR.

    Unknown tokens resolve to OFF instead of raising.

    Examples:
        >>> normalize_severity(parse_rule_entry(2))
        <Severity.ERROR: 'error'>
        >>> normalize_severity(parse_rule_entry(["warn", {"allow": ["info"]}]))
        <Severity.WARNING: 'warning'>
        >>> normalize_severity(parse_rule_entry("loud"))
        <Severity.OFF: 'off'>
    """
    if entry is None:
        return Severity.OFF
    token = entry.token
    # bool is an int subclass; True must not read as 1
    if isinstance(token, bool) or not isinstance(token, (int, str)):
        return Severity.OFF
    return _SEVERITY_TOKENS.get(token, Severity.OFF)


def rule_severity(rules: Mapping[str, Any], rule_name: str) -> Severity:
    """Effective severity of rule_name in an already-resolved rules mapping."""
    return normalize_severity(parse_rule_entry(rules.get(rule_name)))


class ConfigResolver:
    """
    Per-run cache in front of a LintEngine.

    Each file's effective rules are fetched once; concurrent lookups for the
    same file share one engine call.
    """

    def __init__(self, engine: LintEngine) -> None:
        self.engine = engine
        self._pending: Dict[Path, "asyncio.Task[Mapping[str, Any]]"] = {}

    async def rules_for(self, path: Path) -> Mapping[str, Any]:
        task = self._pending.get(path)
        if task is None:
            task = asyncio.ensure_future(self.engine.calculate_rules_for_file(path))
            self._pending[path] = task
        return await task

    async def severity_for(self, path: Path, rule_name: str) -> Severity:
        return rule_severity(await self.rules_for(path), rule_name)


# Runs inside the scan root so require() finds the project's own eslint.
# argv: <mode>; stdin: JSON array of absolute paths
# stdout: JSON array of {ignored, rules}, one per input path, same order
_BRIDGE_SCRIPT = r"""
const path = require('path');
const { createRequire } = require('module');
const [mode] = process.argv.slice(1);
const readStdin = () => new Promise((resolve, reject) => {
  let data = '';
  process.stdin.setEncoding('utf8');
  process.stdin.on('data', (chunk) => { data += chunk; });
  process.stdin.on('end', () => resolve(data));
  process.stdin.on('error', reject);
});
(async () => {
  const files = JSON.parse(await readStdin());
  const req = createRequire(path.join(process.cwd(), '__eslint_disable_scanner__.js'));
  const Engine = mode === 'flat'
    ? req('eslint').ESLint
    : (req('eslint/use-at-your-own-risk').LegacyESLint || req('eslint').ESLint);
  const eslint = new Engine({ cwd: process.cwd() });
  const results = [];
  for (const file of files) {
    const ignored = await eslint.isPathIgnored(file);
    let rules = {};
    if (!ignored) {
      const config = await eslint.calculateConfigForFile(file);
      rules = (config && config.rules) || {};
    }
    results.push({ ignored, rules });
  }
  process.stdout.write(JSON.stringify(results));
})().catch((err) => {
  process.stderr.write(String((err && err.stack) || err));
  process.exit(2);
});
"""

EngineResult = Tuple[bool, Dict[str, Any]]


class ESLintEngine:
    """
    LintEngine backed by the project's installed ESLint, driven through Node.js.

    Lookups are batched: every path requested while the event loop is busy
    elsewhere joins the next batch, and one Node process answers both
    questions for the whole batch. A scan's ignore check covers every
    discovered file at once, so the later rule lookups are served from the
    cached answers without starting Node again.
    """

    def __init__(
        self,
        root: Path,
        mode: ConfigMode,
        node_executable: str = DEFAULT_NODE_EXECUTABLE,
    ) -> None:
        self.root = root
        self.mode = mode
        self.node_executable = node_executable
        self._results: Dict[Path, EngineResult] = {}
        self._pending: Dict[Path, "asyncio.Future[EngineResult]"] = {}
        self._queue: List[Path] = []
        self._flush_task: Optional["asyncio.Task[None]"] = None

    async def is_path_ignored(self, path: Path) -> bool:
        ignored, _ = await self._lookup(path)
        return ignored

    async def calculate_rules_for_file(self, path: Path) -> Mapping[str, Any]:
        _, rules = await self._lookup(path)
        return rules

    def build_command(self) -> List[str]:
        return [self.node_executable, "-e", _BRIDGE_SCRIPT, self.mode.value]

    async def _lookup(self, path: Path) -> EngineResult:
        cached = self._results.get(path)
        if cached is not None:
            return cached

        future = self._pending.get(path)
        if future is None:
            loop = asyncio.get_running_loop()
            future = loop.create_future()
            self._pending[path] = future
            self._queue.append(path)
            if self._flush_task is None:
                self._flush_task = loop.create_task(self._flush())
        return await future

    async def _flush(self) -> None:
        # let the rest of a gather() enqueue before the batch is cut
        await asyncio.sleep(0)
        batch, self._queue = self._queue, []
        self._flush_task = None

        try:
            results = await self._query(batch)
        except Exception as exc:
            for path in batch:
                future = self._pending.pop(path)
                if not future.done():
                    future.set_exception(exc)
            return

        for path, result in zip(batch, results):
            self._results[path] = result
            future = self._pending.pop(path)
            if not future.done():
                future.set_result(result)

    async def _query(self, paths: List[Path]) -> List[EngineResult]:
        payload = json.dumps([str(p) for p in paths])
        logger.debug("Running ESLint bridge (%s config) for %d file(s)", self.mode.value, len(paths))
        output = await asyncio.to_thread(self._run_command, self.build_command(), payload)
        try:
            raw = json.loads(output)
        except json.JSONDecodeError as exc:
            raise LintEngineError("ESLint bridge returned invalid JSON") from exc
        if not isinstance(raw, list) or len(raw) != len(paths):
            raise LintEngineError(
                f"ESLint bridge returned {len(raw) if isinstance(raw, list) else 'no'} "
                f"result(s) for {len(paths)} file(s)"
            )
        return [_parse_result(path, item) for path, item in zip(paths, raw)]

    def _run_command(self, cmd: List[str], payload: str) -> str:
        try:
            result = subprocess.run(
                cmd,
                cwd=self.root,
                input=payload,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise LintEngineError(
                f"Node.js executable '{self.node_executable}' is not installed or not in PATH"
            ) from exc

        if result.returncode != 0:
            detail = (result.stderr or "").strip() or (result.stdout or "").strip() or "unknown error"
            raise LintEngineError(f"ESLint bridge failed: {detail}")

        return result.stdout or ""


def _parse_result(path: Path, item: Any) -> EngineResult:
    if not isinstance(item, dict):
        raise LintEngineError(f"ESLint bridge returned a malformed result for {path}")
    ignored = item.get("ignored")
    rules = item.get("rules")
    if not isinstance(ignored, bool):
        raise LintEngineError(f"ESLint returned a non-boolean ignore result for {path}")
    if not isinstance(rules, dict):
        raise LintEngineError(f"ESLint returned a non-object rule config for {path}")
    return ignored, rules
