# Exception taxonomy: every fatal condition of a scan derives from ScanError.

from __future__ import annotations

from pathlib import Path


class ScanError(Exception):
    """Base class for errors that abort a scan."""


class ConfigNotFoundError(ScanError):
    """Raised when no ESLint configuration exists at the scan root."""

    def __init__(self, root: Path):
        self.root = root
        super().__init__(f"No ESLint config found in {root}")


class FileReadError(ScanError):
    """Raised when a discovered source file cannot be read."""

    def __init__(self, path: Path, error: str):
        self.path = path
        self.error = error
        super().__init__(f"Failed to read {path}: {error}")


class LintEngineError(ScanError):
    """Raised when the ESLint bridge fails or returns unusable output."""


class UnjustifiedSuppressionError(ScanError):
    """Raised after reporting when error rules were disabled without a reason."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"Found {count} disabled ESLint error rule{'s' if count != 1 else ''} "
            "without justification. Process will stop."
        )
