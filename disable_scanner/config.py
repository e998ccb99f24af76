from __future__ import annotations

"""
Scanner configuration: file-discovery defaults, ESLint config detection, and
the per-run ScanConfig.

This module is the single place to update when the set of scanned
extensions, the canonical exclusion globs, or the recognized ESLint config
file names change.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import FrozenSet, Optional, Sequence, Tuple

from disable_scanner.errors import ConfigNotFoundError

logger = logging.getLogger(__name__)

SOURCE_EXTENSIONS: FrozenSet[str] = frozenset({".js", ".jsx", ".ts", ".tsx"})

# Globs relative to the scan root; matched by disable_scanner.globs
DEFAULT_EXCLUDE_GLOBS: Tuple[str, ...] = (
    "node_modules/**",  # NodeJS, build tools
    ".next/**",  # NextJS, Gatsby
    "out/**",  # NextJS, Gatsby
    "dist/**",  # NextJS, NestJS, Gatsby
    "build/**",  # ReactJS, Express, NestJS, React Native
    "coverage/**",  # Jest
    "logs/**",  # NestJS, Express
    "tmp/**",  # NestJS, Express
    ".expo/**",  # React Native
    ".expo-shared/**",  # React Native
    ".turbo/**",  # TurboRepo
    ".vercel/**",  # Vercel
    ".firebase/**",  # Firebase
    ".idea/**",  # JetBrains IDEs
    ".vscode/**",  # VSCode settings
    ".husky/**",  # Husky git hooks
    "android/**",  # React Native
    "ios/**",  # React Native
    "public/**",  # ReactJS, NextJS
    "static/**",  # NextJS, Gatsby
    ".cache/**",  # Gatsby, build tools
    ".storybook/**",  # Storybook
    ".git/**",  # Git
    ".DS_Store",  # macOS
    "*.log",  # log files
)

# Directory names skipped at any depth (nested packages in monorepos)
PRUNED_DIR_NAMES: FrozenSet[str] = frozenset({"node_modules"})

ALLOWLIST_FILENAME = ".eslint-disable-allowlist.json"

FLAT_CONFIG_FILES: Tuple[str, ...] = (
    "eslint.config.js",
    "eslint.config.mjs",
    "eslint.config.cjs",
    "eslint.config.ts",
)

LEGACY_CONFIG_FILES: Tuple[str, ...] = (
    ".eslintrc.js",
    ".eslintrc.cjs",
    ".eslintrc.json",
    ".eslintrc.yaml",
    ".eslintrc.yml",
    ".eslintrc",
)

DEFAULT_NODE_EXECUTABLE = "node"


class ConfigMode(str, Enum):
    """Which ESLint configuration resolution the project uses."""

    FLAT = "flat"
    LEGACY = "legacy"


def detect_config_mode(root: Path) -> ConfigMode:
    """
    Return the ESLint config mode for a project root.

    Flat config wins when both kinds of files are present.

    Raises:
        ConfigNotFoundError: if neither a flat nor a legacy config file exists.
    """
    if any((root / name).exists() for name in FLAT_CONFIG_FILES):
        logger.debug("Detected flat ESLint config in %s", root)
        return ConfigMode.FLAT
    if any((root / name).exists() for name in LEGACY_CONFIG_FILES):
        logger.debug("Detected legacy ESLint config in %s", root)
        return ConfigMode.LEGACY
    raise ConfigNotFoundError(root)


@dataclass
class ScanConfig:
    """
    Settings for one scan run.

    The CLI builds one of these from its arguments; library callers can
    construct it directly to override discovery or the Node executable.
    """

    root: Path
    mode: ConfigMode = ConfigMode.FLAT
    extensions: FrozenSet[str] = SOURCE_EXTENSIONS
    exclude_globs: Sequence[str] = field(default_factory=lambda: DEFAULT_EXCLUDE_GLOBS)
    allowlist_filename: str = ALLOWLIST_FILENAME
    node_executable: str = DEFAULT_NODE_EXECUTABLE

    @classmethod
    def for_root(cls, root: Path, flat_config: Optional[bool] = None, **kwargs) -> "ScanConfig":
        """Build a config for root, detecting the ESLint mode when flat_config is None."""
        root = root.resolve()
        if flat_config is None:
            mode = detect_config_mode(root)
        else:
            mode = ConfigMode.FLAT if flat_config else ConfigMode.LEGACY
        return cls(root=root, mode=mode, **kwargs)
