# Allowlist policy: optional project-root file exempting rules and paths from reporting.

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, FrozenSet, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from disable_scanner.config import ALLOWLIST_FILENAME
from disable_scanner.globs import matches_any

logger = logging.getLogger(__name__)


class AllowlistPolicy(BaseModel):
    """
    Rules and path patterns that are never reported.

    On disk this is a JSON object with two optional arrays:

        {"rules": ["no-console"], "paths": ["scripts/**"]}

    Path patterns are matched against the file path relative to the scan
    root, so the same policy file works on every machine.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    exempt_rules: FrozenSet[str] = Field(default_factory=frozenset, alias="rules")
    exempt_path_patterns: Tuple[str, ...] = Field(default_factory=tuple, alias="paths")

    @field_validator("exempt_rules", "exempt_path_patterns", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return () if value is None else value

    def is_rule_exempt(self, rule_name: str) -> bool:
        return rule_name in self.exempt_rules

    def is_path_exempt(self, rel_path: str) -> bool:
        return matches_any(rel_path, self.exempt_path_patterns)


EMPTY_POLICY = AllowlistPolicy()


def load_allowlist(root: Path, filename: str = ALLOWLIST_FILENAME) -> AllowlistPolicy:
    """
    Load the allowlist policy from root/filename.

    - Missing file: empty policy, nothing logged beyond debug.
    - Unreadable, invalid JSON, or wrong shape: warning and empty policy.
      A broken policy file never aborts the scan.
    """
    path = root / filename
    if not path.is_file():
        logger.debug("No allowlist file at %s", path)
        return EMPTY_POLICY

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Ignoring allowlist %s: could not parse it (%s)", path, e)
        return EMPTY_POLICY

    if not isinstance(raw, dict):
        logger.warning("Ignoring allowlist %s: expected a JSON object", path)
        return EMPTY_POLICY

    try:
        policy = AllowlistPolicy.model_validate(raw)
    except ValidationError as e:
        logger.warning(
            "Ignoring allowlist %s: %d invalid field(s)", path, e.error_count()
        )
        return EMPTY_POLICY

    logger.info(
        "Loaded allowlist %s: %d rule(s), %d path pattern(s)",
        path,
        len(policy.exempt_rules),
        len(policy.exempt_path_patterns),
    )
    return policy
