"""
Repozip - Zip every repo you own, in one command.

"In a world of ephemeral clouds, be the one with local backups." — schema.cx
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .errors import (
    ArchiveWriteError,
    ConfigError,
    DecodeError,
    HttpStatusError,
    RepozipError,
    TransportError,
)
from .models import ArchivePayload, BackupConfig, BackupSummary, Owner, RepositoryDescriptor

__all__ = [
    "ArchivePayload",
    "ArchiveWriteError",
    "BackupConfig",
    "BackupSummary",
    "ConfigError",
    "DecodeError",
    "HttpStatusError",
    "Owner",
    "RepositoryDescriptor",
    "RepozipError",
    "TransportError",
    "__version__",
]
