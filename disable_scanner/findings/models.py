# Pydantic data models for suppression findings: Severity, Finding, ScanVerdict.

from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, computed_field


class Severity(str, Enum):
    """Effective severity of a rule after ESLint resolved the file's config."""

    OFF = "off"
    WARNING = "warning"
    ERROR = "error"


class Finding(BaseModel):
    """A suppression comment that disables a rule active in its file."""

    file_path: str = Field(..., description="Path relative to the scan root")
    line: int = Field(..., ge=1, description="1-based line number")
    column: int = Field(..., ge=1, description="1-based column number")
    severity: Literal["warning", "error"]
    rule_name: str
    justification_missing: bool
    justification: Optional[str] = None
    kind: Literal["block", "line"] = "line"

    model_config = {"frozen": True}


class ScanVerdict(BaseModel):
    """Terminal outcome of a scan: findings in discovery order plus the verdict."""

    findings: List[Finding] = Field(default_factory=list)
    files_scanned: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def should_fail(self) -> bool:
        return self.unjustified_error_count > 0

    @property
    def error_count(self) -> int:
        return sum(1 for f in self.findings if f.severity == Severity.ERROR.value)

    @property
    def warning_count(self) -> int:
        return sum(1 for f in self.findings if f.severity == Severity.WARNING.value)

    @property
    def unjustified_error_count(self) -> int:
        return sum(
            1
            for f in self.findings
            if f.severity == Severity.ERROR.value and f.justification_missing
        )
