import errno
from pathlib import Path
from typing import Union

from config import COMPRESSED_EXTENSION, SOURCE_SUFFIX

PathLike = Union[str, Path]


class ArtifactError(Exception):
    """Base error for artifact storage access"""

    def __init__(self, path: PathLike, message: str):
        self.path = str(path)
        self.message = message
        super().__init__(f"{message}: {self.path}")


class ArtifactNotFoundError(ArtifactError):
    """Artifact is absent (or outside the content root)"""

    def __init__(self, path: PathLike):
        super().__init__(path, 'Artifact not found')


class ArtifactReadError(ArtifactError):
    """Artifact exists but could not be read or written"""


def _guarded(path: PathLike, action):
    try:
        return action()
    except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
        raise ArtifactNotFoundError(path)
    except UnicodeError as e:
        raise ArtifactReadError(path, str(e)) from e
    except ValueError:
        # embedded NUL byte: no such file can exist
        raise ArtifactNotFoundError(path)
    except OSError as e:
        if e.errno == errno.ENAMETOOLONG:
            raise ArtifactNotFoundError(path)
        raise ArtifactReadError(path, str(e)) from e


def file_exists(path: PathLike) -> bool:
    """True for a regular file; False for names that can't exist on this filesystem."""
    try:
        return _guarded(path, Path(path).is_file)
    except ArtifactNotFoundError:
        return False


def read_text_file(path: PathLike) -> str:
    """Read UTF-8 text exactly as stored (no newline translation)."""
    def _read():
        with open(path, 'r', encoding='utf-8', newline='') as f:
            return f.read()
    return _guarded(path, _read)


def read_binary_file(path: PathLike) -> bytes:
    def _read():
        with open(path, 'rb') as f:
            return f.read()
    return _guarded(path, _read)


def write_text_file(path: PathLike, text: str) -> Path:
    """Write UTF-8 text exactly as given; returns the path written."""
    def _write():
        with open(path, 'w', encoding='utf-8', newline='') as f:
            f.write(text)
        return Path(path)
    try:
        return _write()
    except OSError as e:
        raise ArtifactReadError(path, str(e)) from e


class ArtifactRepository:
    """
    Page artifacts under one content root.

    A logical page `name` is stored as `name.source.html` (raw source) and
    optionally `name.m8` (cached compressed payload).
    """

    def __init__(self, root_dir: PathLike):
        self.root = Path(root_dir).resolve()

    def resolve(self, url_path: str) -> Path:
        """Map a URL path onto the content root.

        Raises:
            ArtifactNotFoundError: if the path escapes the root or can't name a file
        """
        candidate = self.root / url_path.lstrip('/')
        resolved = _guarded(candidate, candidate.resolve)
        if resolved != self.root and self.root not in resolved.parents:
            raise ArtifactNotFoundError(candidate)
        return resolved

    @staticmethod
    def source_path_for(compressed_path: Path) -> Path:
        """name.m8 -> name.source.html"""
        name = compressed_path.name
        if name.lower().endswith(COMPRESSED_EXTENSION):
            name = name[:-len(COMPRESSED_EXTENSION)]
        return compressed_path.with_name(name + SOURCE_SUFFIX)

    exists = staticmethod(file_exists)
    read_text = staticmethod(read_text_file)
    read_bytes = staticmethod(read_binary_file)
