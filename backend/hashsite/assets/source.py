"""Asset sources: where publishable files come from."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Protocol


@dataclass(frozen=True)
class AssetFile:
    """One file offered by a source. path is what gets served."""

    name: str
    path: Path


class AssetSource(Protocol):
    """Enumerates files of one category (a directory on disk in production)."""

    def exists(self) -> bool: ...

    def list_files(self) -> List[AssetFile]: ...

    def read_bytes(self, entry: AssetFile) -> bytes: ...


class DirectoryAssetSource:
    """Regular files directly under root (not recursive), in name order."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root).resolve()

    def __repr__(self) -> str:
        return f"DirectoryAssetSource({str(self.root)!r})"

    def exists(self) -> bool:
        return self.root.is_dir()

    def list_files(self) -> List[AssetFile]:
        return [
            AssetFile(name=p.name, path=p)
            for p in sorted(self.root.iterdir(), key=lambda p: p.name)
            if p.is_file()
        ]

    def read_bytes(self, entry: AssetFile) -> bytes:
        return entry.path.read_bytes()
