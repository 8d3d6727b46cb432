"""Pathspec-based file filtering.

Decides which files a directory scan should visit. Uses the pathspec
library for gitignore semantics: negation patterns, double-star globs,
and nested gitignore files.
"""

import logging
from pathlib import Path
from typing import Iterator, Optional

import pathspec

from issue_linker.config import ScanConfig

logger = logging.getLogger(__name__)


# Always skipped, whether or not a .gitignore exists
DEFAULT_IGNORE_PATTERNS: list[str] = [
    ".git/",
    "node_modules/",
    "venv/",
    ".venv/",
    "__pycache__/",
    "*.pyc",
    "dist/",
    "build/",
    "vendor/",
    "*.min.js",
    "*.min.css",
    ".idea/",
    ".vscode/",
    "*.egg-info/",
    ".tox/",
    ".pytest_cache/",
    ".mypy_cache/",
    "coverage/",
    "target/",  # Rust/Java
    "bin/",
    "obj/",  # .NET
]


def _read_spec(gitignore_path: Path) -> Optional[pathspec.PathSpec]:
    try:
        with open(gitignore_path, encoding="utf-8") as f:
            lines = f.readlines()
    except OSError as e:
        logger.warning(f"Failed to read {gitignore_path}: {e}")
        return None
    return pathspec.PathSpec.from_lines("gitwildmatch", lines)


class PathspecFilter:
    """File filter based on pathspec library with nested gitignore support."""

    def __init__(self, root: Path, config: Optional[ScanConfig] = None):
        """
        Initialize the filter.

        Args:
            root: Directory that ignore rules are relative to, usually the
                repository root
            config: Scan configuration
        """
        self.root = root
        self.config = config or ScanConfig()
        self._default_spec = pathspec.PathSpec.from_lines(
            "gitwildmatch",
            DEFAULT_IGNORE_PATTERNS + list(self.config.extra_ignore_patterns),
        )
        self._root_spec: Optional[pathspec.PathSpec] = None
        self._nested_specs: dict[Path, pathspec.PathSpec] = {}
        if self.config.respect_gitignore:
            self._load_gitignores()

    def _load_gitignores(self) -> None:
        root_gitignore = self.root / ".gitignore"
        if root_gitignore.is_file():
            self._root_spec = _read_spec(root_gitignore)

        if not self.config.include_nested:
            return

        for gitignore_path in self.root.rglob(".gitignore"):
            if gitignore_path.parent == self.root:
                continue  # Root, already loaded
            if self._default_spec.match_file(self._relative(gitignore_path)):
                continue
            spec = _read_spec(gitignore_path)
            if spec is not None:
                self._nested_specs[gitignore_path.parent] = spec

    def _relative(self, path: Path) -> str:
        relative = path.relative_to(self.root) if path.is_absolute() else path
        return relative.as_posix()

    def should_ignore(self, path: Path) -> bool:
        """
        Check if a file should be ignored.

        Default patterns and the root .gitignore apply everywhere; a nested
        .gitignore applies to its own directory and below.
        """
        try:
            relative_str = self._relative(path)
        except ValueError:
            return False  # Outside the scan root

        if self._default_spec.match_file(relative_str):
            return True
        if self._root_spec is not None and self._root_spec.match_file(relative_str):
            return True

        # Deepest gitignore first
        for gitignore_dir in sorted(self._nested_specs, key=lambda p: len(p.parts), reverse=True):
            try:
                path_from_gitignore = (self.root / relative_str).relative_to(gitignore_dir)
            except ValueError:
                continue
            if self._nested_specs[gitignore_dir].match_file(path_from_gitignore.as_posix()):
                return True

        return False

    def iter_files(self, start: Optional[Path] = None) -> Iterator[Path]:
        """
        Yield scannable files in sorted order.

        Args:
            start: Directory to walk, inside the root. Ignore rules are still
                matched relative to the root. Defaults to the root itself.
        """
        for file_path in sorted((start or self.root).rglob("*")):
            if not file_path.is_file():
                continue
            if self.should_ignore(file_path):
                continue
            try:
                size = file_path.stat().st_size
            except OSError:
                continue
            if size > self.config.max_file_size:
                logger.warning(f"Skipping {file_path}: {size} bytes exceeds limit")
                continue
            yield file_path
