"""
File collection for a scan.

Turns path arguments into the ordered, deduplicated list of absolute file
paths sent to the IDE bridge. Without arguments the outstanding git changes
of the working directory are used instead.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from verify_sonar.shared.domain.exceptions import CollectionError
from verify_sonar.shared.infrastructure.execution.command_executor import CommandExecutor
from verify_sonar.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

# Languages analyzed by SonarQube for IDE
SUPPORTED_EXTENSIONS = frozenset({
    ".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs",
    ".java", ".py", ".go",
    ".c", ".cpp", ".h", ".hpp",
    ".php", ".html", ".htm", ".css", ".scss", ".xml",
})

SKIP_DIRS = frozenset({
    "node_modules", ".git", "dist", "build", "target",
    "__pycache__", ".venv", "venv", ".idea", ".vscode",
})


def is_supported_file(path: str | Path) -> bool:
    return Path(path).suffix.lower() in SUPPORTED_EXTENSIONS


def dedupe(paths: Iterable[str]) -> List[str]:
    """Drop repeated paths, keeping the first occurrence."""
    return list(dict.fromkeys(paths))


@dataclass(frozen=True)
class GitStatusEntry:
    """One line of ``git status --porcelain``."""
    status: str
    file_path: str

    @property
    def is_deleted(self) -> bool:
        return "D" in self.status


def parse_git_status_line(line: str) -> Optional[GitStatusEntry]:
    """
    Parse a porcelain v1 line (``XY path``).

    Renames (``R  old -> new``) resolve to the new path. Blank lines give None.
    """
    if not line.strip():
        return None

    status = line[:2]
    file_path = line[3:].strip()

    if status.startswith("R"):
        file_path = file_path.split(" -> ")[-1]

    return GitStatusEntry(status=status, file_path=file_path)


class FileCollector:
    """
    Collects scannable files relative to an explicit working directory.
    """

    def __init__(self, cwd: str | Path, executor: CommandExecutor | None = None):
        # Normalized, not resolved: symlinked paths must reach the bridge as given
        self.cwd = Path(os.path.abspath(cwd))
        self.executor = executor or CommandExecutor()

    def walk_directory(self, directory: Path) -> List[str]:
        """
        Recursively list supported files under ``directory``.

        Skips build/vendor directories, hidden directories and symlinks.
        Unreadable directories are ignored. Output is sorted per directory level.
        """
        files: List[str] = []

        def _on_error(error: OSError) -> None:
            logger.debug("directory_unreadable", path=error.filename, error=error.strerror)

        for root, dirs, filenames in os.walk(directory, onerror=_on_error):
            dirs[:] = sorted(d for d in dirs if d not in SKIP_DIRS and not d.startswith("."))
            for name in sorted(filenames):
                full_path = os.path.join(root, name)
                if is_supported_file(name) and os.path.isfile(full_path) and not os.path.islink(full_path):
                    files.append(full_path)

        return files

    def collect_path(self, scan_path: str) -> List[str]:
        """
        Resolve one argument into absolute file paths.

        Raises:
            CollectionError: If the path is missing or is not a file or directory
        """
        absolute_path = Path(os.path.abspath(os.path.join(self.cwd, scan_path)))

        if not absolute_path.exists():
            raise CollectionError(f"Path does not exist: {scan_path}", {"path": scan_path})

        # Explicit files are passed through whatever their extension
        if absolute_path.is_file():
            return [str(absolute_path)]

        if absolute_path.is_dir():
            return self.walk_directory(absolute_path)

        raise CollectionError(f"Invalid path type: {scan_path}", {"path": scan_path})

    def collect_from_args(self, args: Iterable[str]) -> List[str]:
        files: List[str] = []
        for arg in args:
            files.extend(self.collect_path(arg))
        return dedupe(files)

    async def git_changed_files_async(self) -> List[str]:
        """
        Files with outstanding git changes, excluding deletions.

        Any git failure (not a repository, git missing) yields an empty list.
        """
        result = await self.executor.run_async(["git", "status", "--porcelain"], cwd=self.cwd)
        if not result.is_success:
            logger.info("git_status_unavailable", exit_code=result.exit_code, stderr=result.stderr[:200])
            return []

        files: List[str] = []
        for line in result.stdout.splitlines():
            entry = parse_git_status_line(line)
            if entry is None or entry.is_deleted:
                continue

            absolute_path = Path(os.path.abspath(os.path.join(self.cwd, entry.file_path)))
            if is_supported_file(entry.file_path) and absolute_path.exists():
                files.append(str(absolute_path))

        return dedupe(files)
