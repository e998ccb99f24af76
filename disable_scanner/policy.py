# Policy evaluation: turn suppression candidates into findings and a verdict.

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Sequence

from disable_scanner.allowlist import AllowlistPolicy
from disable_scanner.engine import ConfigResolver
from disable_scanner.extractor import SuppressionCandidate
from disable_scanner.findings.models import Finding, ScanVerdict, Severity

logger = logging.getLogger(__name__)


async def evaluate_file(
    path: Path,
    rel_path: str,
    candidates: Sequence[SuppressionCandidate],
    policy: AllowlistPolicy,
    resolver: ConfigResolver,
) -> List[Finding]:
    """
    Apply the allowlist and effective severities to one file's candidates.

    Order of checks: allowlisted path, allowlisted rule, disabled rule.
    Surviving candidates become findings in extraction order.
    """
    if not candidates:
        return []
    if policy.is_path_exempt(rel_path):
        logger.debug("Skipping %d suppression(s) in allowlisted %s", len(candidates), rel_path)
        return []

    findings: List[Finding] = []
    for c in candidates:
        if policy.is_rule_exempt(c.rule_name):
            logger.debug("Allowlisted rule %s at %s:%d", c.rule_name, rel_path, c.line)
            continue
        severity = await resolver.severity_for(path, c.rule_name)
        if severity is Severity.OFF:
            continue
        findings.append(
            Finding(
                file_path=rel_path,
                line=c.line,
                column=c.column,
                severity=severity.value,
                rule_name=c.rule_name,
                justification_missing=c.justification_missing,
                justification=c.justification,
                kind=c.kind,
            )
        )
    return findings


def build_verdict(per_file: Iterable[List[Finding]], files_scanned: int = 0) -> ScanVerdict:
    """Merge per-file findings, already in discovery order, into a verdict."""
    findings: List[Finding] = []
    for file_findings in per_file:
        findings.extend(file_findings)
    return ScanVerdict(findings=findings, files_scanned=files_scanned)
