from .artifacts import (
    ArtifactError,
    ArtifactNotFoundError,
    ArtifactReadError,
    ArtifactRepository,
    read_text_file,
    write_text_file
)

__all__ = [
    'ArtifactError',
    'ArtifactNotFoundError',
    'ArtifactReadError',
    'ArtifactRepository',
    'read_text_file',
    'write_text_file'
]
