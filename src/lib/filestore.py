"""
Backing file store

The compiler only needs two primitives from storage: an existence check and
a raw byte read. Path algebra is plain os.path.
"""

from pathlib import Path
from typing import Dict, Mapping, Protocol


class FileStore(Protocol):
    """Read-only storage the compiler checks and reads includes from"""

    def exists(self, path: str) -> bool:
        ...

    def read_bytes(self, path: str) -> bytes:
        ...


class LocalFileStore:
    """FileStore backed by the local filesystem"""

    def exists(self, path: str) -> bool:
        """True for regular files; directories never match an include"""
        return Path(path).is_file()

    def read_bytes(self, path: str) -> bytes:
        return Path(path).read_bytes()


class MemoryFileStore:
    """
    FileStore backed by a dict of absolute path -> content

    Used for embedding turf where templates do not live on disk.

    Example:
        >>> store = MemoryFileStore({"/site/_nav.kit": "<nav/>"})
        >>> store.exists("/site/_nav.kit")
        True
    """

    def __init__(self, files: Mapping[str, object]) -> None:
        self.files: Dict[str, bytes] = {
            path: content.encode("utf-8") if isinstance(content, str) else bytes(content)
            for path, content in files.items()
        }

    def exists(self, path: str) -> bool:
        return path in self.files

    def read_bytes(self, path: str) -> bytes:
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(path) from None
