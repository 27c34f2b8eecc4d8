"""Dataclasses for project generation."""
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Dict, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class PlannedFile:
    """A path the generator will emit and the role that renders it."""
    path: str  # Relative POSIX path inside the archive
    role: str  # Logical template role, e.g. "main" or "storage"
    variant: Optional[str] = None  # Framework or driver id for variant roles


def check_relative_path(path: str, project_name: str = "") -> str:
    """Validate that ``path`` is a normalized relative POSIX path and return it."""
    if not path or "\\" in path or path.startswith("/"):
        raise ValueError(f"invalid plan path: {path!r}")
    parts = path.split("/")
    if any(part in ("", ".", "..") for part in parts):
        raise ValueError(f"invalid plan path: {path!r}")
    if str(PurePosixPath(path)) != path:
        raise ValueError(f"invalid plan path: {path!r}")
    if project_name and parts[0] == project_name and len(parts) > 1 and parts[1] == project_name:
        raise ValueError(f"plan path repeats the project name: {path!r}")
    return path


class FilePlan:
    """Ordered mapping of relative path to file bytes.

    Iteration always follows sorted path order so archives are reproducible.
    """

    def __init__(self, project_name: str):
        self.project_name = project_name
        self._files: Dict[str, bytes] = {}

    def add(self, path: str, content: str) -> None:
        check_relative_path(path, self.project_name)
        if path in self._files:
            raise ValueError(f"duplicate plan path: {path}")
        self._files[path] = content.encode("utf-8")

    def __contains__(self, path: str) -> bool:
        return path in self._files

    def __getitem__(self, path: str) -> bytes:
        return self._files[path]

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths())

    def paths(self) -> List[str]:
        return sorted(self._files)

    def items(self) -> List[Tuple[str, bytes]]:
        return [(path, self._files[path]) for path in self.paths()]

    def text(self, path: str) -> str:
        return self._files[path].decode("utf-8")
