"""
Scan orchestration: discovery, extraction and policy evaluation for one run.

All per-run state (root, engine, allowlist, config cache) lives on a
ScanSession, so several scans can run in one process without sharing
anything.

- ``scan`` is the pure coroutine: it returns a ScanVerdict and prints nothing.
- ``run_checker`` is the caller-facing entry: it prints the full report and
  raises UnjustifiedSuppressionError afterwards when the verdict fails.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from disable_scanner.allowlist import AllowlistPolicy, load_allowlist
from disable_scanner.config import ScanConfig
from disable_scanner.engine import ConfigResolver, ESLintEngine, LintEngine
from disable_scanner.errors import FileReadError, UnjustifiedSuppressionError
from disable_scanner.extractor import extract_suppressions
from disable_scanner.findings.models import Finding, ScanVerdict
from disable_scanner.globs import to_relative_posix
from disable_scanner.policy import build_verdict, evaluate_file
from disable_scanner.reporting.console import print_report, print_scan_header
from disable_scanner.traversal import discover_files

logger = logging.getLogger(__name__)


@dataclass
class ScanSession:
    """Everything one scan run needs; the policy is read-only once loaded."""

    config: ScanConfig
    engine: LintEngine
    policy: AllowlistPolicy
    resolver: ConfigResolver = field(init=False)

    def __post_init__(self) -> None:
        self.resolver = ConfigResolver(self.engine)

    @property
    def root(self) -> Path:
        return self.config.root

    async def scan_file(self, path: Path) -> List[Finding]:
        """Read one file and return its findings."""
        rel_path = to_relative_posix(path, self.root)
        try:
            content = await asyncio.to_thread(
                path.read_text, encoding="utf-8", errors="replace"
            )
        except OSError as e:
            raise FileReadError(path, str(e)) from e

        candidates = extract_suppressions(content)
        logger.debug("%s: %d suppression candidate(s)", rel_path, len(candidates))
        return await evaluate_file(path, rel_path, candidates, self.policy, self.resolver)

    async def run(self) -> ScanVerdict:
        files = await discover_files(
            self.root,
            self.engine,
            extensions=self.config.extensions,
            exclude_globs=self.config.exclude_globs,
        )
        per_file = await asyncio.gather(*(self.scan_file(p) for p in files))
        verdict = build_verdict(per_file, files_scanned=len(files))
        logger.info(
            "Scanned %d file(s): %d error and %d warning suppression(s)",
            verdict.files_scanned,
            verdict.error_count,
            verdict.warning_count,
        )
        return verdict


async def scan(
    root: Path,
    engine: LintEngine,
    policy: Optional[AllowlistPolicy] = None,
    config: Optional[ScanConfig] = None,
) -> ScanVerdict:
    """
    Scan root and return the verdict without printing anything.

    When policy is None the allowlist file at root is loaded.
    """
    if config is None:
        config = ScanConfig(root=root.resolve())
    if policy is None:
        policy = load_allowlist(config.root, config.allowlist_filename)
    session = ScanSession(config=config, engine=engine, policy=policy)
    return await session.run()


def run_checker(
    root: Path,
    flat_config: Optional[bool] = None,
    *,
    engine: Optional[LintEngine] = None,
    config: Optional[ScanConfig] = None,
    console: Optional[Console] = None,
) -> ScanVerdict:
    """
    Scan root, print the grouped report, and enforce the policy.

    Args:
        root: Project directory to scan.
        flat_config: True for flat config, False for legacy; None detects it.
        engine: Lint engine to use; defaults to ESLintEngine for the project.
        config: Full scan settings; overrides root and flat_config when given.
        console: Rich console for output.

    Returns:
        The verdict, when no unjustified error-severity suppression exists.

    Raises:
        UnjustifiedSuppressionError: after the full report was printed.
        ScanError: for infrastructure failures (unreadable file, ESLint bridge).
    """
    if config is None:
        config = ScanConfig.for_root(root, flat_config)
    if engine is None:
        engine = ESLintEngine(
            config.root,
            config.mode,
            node_executable=config.node_executable,
        )
    console = console or Console()

    print_scan_header(console)
    verdict = asyncio.run(scan(config.root, engine, config=config))
    print_report(verdict, console)

    if verdict.should_fail:
        raise UnjustifiedSuppressionError(verdict.unjustified_error_count)
    return verdict
