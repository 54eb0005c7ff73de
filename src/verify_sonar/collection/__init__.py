from .collector import (
    SKIP_DIRS,
    SUPPORTED_EXTENSIONS,
    FileCollector,
    GitStatusEntry,
    parse_git_status_line,
)

__all__ = [
    "SKIP_DIRS",
    "SUPPORTED_EXTENSIONS",
    "FileCollector",
    "GitStatusEntry",
    "parse_git_status_line",
]
