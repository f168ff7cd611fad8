import os
from pathlib import Path
from typing import Optional, Protocol


class FileOracle(Protocol):
    """Answers whether a root-relative path names an existing file."""

    def exists(self, relative_path: str) -> bool: ...


def within_root(root: Path, relative_path: str) -> Optional[Path]:
    """
    Join ``relative_path`` onto ``root``; None if the result escapes the root
    or cannot name a file at all (embedded NUL).
    """
    if "\0" in relative_path:
        return None
    candidate = Path(os.path.normpath(root / relative_path.lstrip("/")))
    if candidate != root and root not in candidate.parents:
        return None
    return candidate


class DiskFiles:
    """FileOracle backed by the local root on disk."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def exists(self, relative_path: str) -> bool:
        candidate = within_root(self.root, relative_path)
        return candidate is not None and candidate.is_file()

    def __repr__(self) -> str:
        return f"DiskFiles({str(self.root)!r})"
