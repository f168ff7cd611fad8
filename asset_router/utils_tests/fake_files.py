from typing import Iterable


class FakeFiles:
    """In-memory FileOracle: a set of root-relative paths that exist."""

    def __init__(self, paths: Iterable[str] = ()):
        self.paths = {p.lstrip("/") for p in paths}
        self.checked: list[str] = []

    def exists(self, relative_path: str) -> bool:
        self.checked.append(relative_path)
        return relative_path.lstrip("/") in self.paths
