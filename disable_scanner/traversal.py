"""
File system traversal: walk a project and collect JS/TS source files.

Discovery happens in two steps:

1. ``find_source_files`` walks the tree and keeps files with a scanned
   extension, skipping the canonical exclusion globs (dependency, build,
   cache, VCS and IDE directories) and dot-prefixed entries. ``node_modules``
   folders are pruned at any depth.
2. ``filter_ignored`` asks the lint engine, concurrently for all files,
   whether each one is ignored by the project's own ignore configuration.

The exclusion list only covers common project scaffolding; unusual layouts
rely on ESLint's ignore configuration for the rest.

Typical usage:
    from pathlib import Path
    from disable_scanner.traversal import find_source_files

    files = find_source_files(Path("./my_project"))

    files = find_source_files(
        Path("./my_project"),
        exclude_globs=("vendor/**", "generated/**"),
    )
"""

import asyncio
import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from disable_scanner.config import DEFAULT_EXCLUDE_GLOBS, PRUNED_DIR_NAMES, SOURCE_EXTENSIONS
from disable_scanner.engine import LintEngine
from disable_scanner.globs import matches_any, to_relative_posix

logger = logging.getLogger(__name__)


def is_source_file(path: Path, extensions: Iterable[str] = SOURCE_EXTENSIONS) -> bool:
    """
    Check if a file has one of the scanned extensions (case-sensitive).

    Examples:
        >>> is_source_file(Path("app.tsx"))
        True
        >>> is_source_file(Path("app.JS"))
        False
        >>> is_source_file(Path("types.d.ts"))
        True
    """
    return path.suffix in extensions


def is_excluded(rel_path: str, exclude_globs: Sequence[str], is_dir: bool = False) -> bool:
    """
    Check a root-relative POSIX path against the exclusion globs.

    Directories are tested with a trailing slash so ``dist/**`` prunes the
    whole ``dist`` directory before it is walked.

    Examples:
        >>> is_excluded("node_modules", ("node_modules/**",), is_dir=True)
        True
        >>> is_excluded("src/node_modules", ("node_modules/**",), is_dir=True)
        False
        >>> is_excluded("debug.log", ("*.log",))
        True
    """
    if is_dir:
        rel_path = rel_path + "/"
    return matches_any(rel_path, exclude_globs)


def find_source_files(
    root: Path,
    extensions: Iterable[str] = SOURCE_EXTENSIONS,
    exclude_globs: Optional[Sequence[str]] = None,
    follow_symlinks: bool = False,
    include_hidden: bool = False,
    filter_fn: Optional[Callable[[Path], bool]] = None,
    prune_dir_names: Iterable[str] = PRUNED_DIR_NAMES,
) -> List[Path]:
    """
    Recursively find all JS/TS source files under root.

    Args:
        root: Root directory to start traversal from.
        extensions: Suffixes to collect, including the dot.
        exclude_globs: Root-relative globs to skip. If None, uses DEFAULT_EXCLUDE_GLOBS.
        follow_symlinks: If True, follow symbolic links during traversal.
        include_hidden: If True, also walk dot-prefixed files and directories.
        filter_fn: Optional additional filter; only files for which it
                   returns True are kept.
        prune_dir_names: Directory names skipped at any depth, such as the
                         node_modules folders of nested packages.

    Returns:
        Absolute paths of matching files, sorted for deterministic ordering.

    Raises:
        FileNotFoundError: If the root directory does not exist.
        NotADirectoryError: If root is not a directory.

    Notes:
        - Permission errors on subdirectories are logged but do not stop traversal.
        - The root path is resolved to an absolute path before traversal.
    """
    if exclude_globs is None:
        exclude_globs = DEFAULT_EXCLUDE_GLOBS
    extensions = frozenset(extensions)
    prune_dir_names = frozenset(prune_dir_names)

    root = root.resolve()

    if not root.exists():
        logger.error("Root directory does not exist: %s", root)
        raise FileNotFoundError(f"Root directory does not exist: {root}")

    if not root.is_dir():
        logger.error("Root path is not a directory: %s", root)
        raise NotADirectoryError(f"Root path is not a directory: {root}")

    logger.info("Starting traversal from: %s", root)

    collected_files: List[Path] = []

    def _walk_directory(current_dir: Path) -> None:
        try:
            for entry in current_dir.iterdir():
                if entry.is_symlink() and not follow_symlinks:
                    logger.debug("Skipping symlink: %s", entry)
                    continue
                if entry.name.startswith(".") and not include_hidden:
                    continue

                rel = to_relative_posix(entry, root)
                if entry.is_dir():
                    if entry.name in prune_dir_names:
                        logger.debug("Pruning directory: %s", entry)
                        continue
                    if is_excluded(rel, exclude_globs, is_dir=True):
                        logger.debug("Ignoring directory: %s", entry)
                        continue
                    _walk_directory(entry)

                elif entry.is_file():
                    if not is_source_file(entry, extensions):
                        continue
                    if is_excluded(rel, exclude_globs):
                        logger.debug("Ignoring file: %s", entry)
                        continue
                    if filter_fn is not None and not filter_fn(entry):
                        logger.debug("Filtered out by custom filter: %s", entry)
                        continue
                    collected_files.append(entry)

        except PermissionError as e:
            logger.warning("Permission denied accessing directory %s: %s", current_dir, e)
        except OSError as e:
            logger.warning("Error accessing directory %s: %s", current_dir, e)

    _walk_directory(root)

    collected_files.sort()

    logger.info(
        "Traversal complete: found %d source file(s) in %s",
        len(collected_files),
        root,
    )

    return collected_files


async def filter_ignored(files: Sequence[Path], engine: LintEngine) -> List[Path]:
    """
    Drop files the lint engine ignores (ignore files, ignorePatterns, ignores).

    All checks are issued at once and joined; input order is preserved.
    """
    verdicts = await asyncio.gather(*(engine.is_path_ignored(f) for f in files))
    kept = [f for f, ignored in zip(files, verdicts) if not ignored]
    if len(kept) != len(files):
        logger.info("ESLint ignores %d of %d file(s)", len(files) - len(kept), len(files))
    return kept


async def discover_files(
    root: Path,
    engine: LintEngine,
    extensions: Iterable[str] = SOURCE_EXTENSIONS,
    exclude_globs: Optional[Sequence[str]] = None,
) -> List[Path]:
    """Static discovery followed by the engine's ignore check."""
    candidates = await asyncio.to_thread(
        find_source_files, root, extensions, exclude_globs
    )
    return await filter_ignored(candidates, engine)
