"""
Data models for Repozip.

"In the end, it's all just data. But zipped data? That's portable." — schema.cx
"""

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_OUTPUT_DIRECTORY = "./backups"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TOKEN_ENV = "GITHUB_AUTH_KEY"
DEFAULT_ENV_FILE = ".env"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_PAGES = 10


@dataclass(frozen=True)
class Owner:
    """A GitHub account, identified by its login."""

    login: str


@dataclass(frozen=True)
class RepositoryDescriptor:
    """
    One repository as returned by the list-repositories endpoint.

    Only the fields needed to request the archive are kept.
    """

    owner: Owner
    name: str
    default_branch: str

    @property
    def full_name(self) -> str:
        """Get the owner/name form used in messages."""
        return f"{self.owner.login}/{self.name}"


@dataclass
class ArchivePayload:
    """Raw zipball bytes for a single repository."""

    repository_name: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass
class BackupConfig:
    """
    Configuration for a backup run.

    "Configuration is just organized paranoia." — schema.cx
    """

    # Destination
    output_directory: Path = Path(DEFAULT_OUTPUT_DIRECTORY)

    # Filtering
    allow_other_owners: bool = False
    owner_login: str | None = None  # None means ask GitHub who we are

    # API access
    api_url: str = DEFAULT_API_URL
    token_env: str = DEFAULT_TOKEN_ENV
    env_file: Path | None = Path(DEFAULT_ENV_FILE)
    timeout: float = DEFAULT_TIMEOUT
    max_pages: int = DEFAULT_MAX_PAGES

    # Execution options
    dry_run: bool = False

    def __post_init__(self) -> None:
        """Validate and normalize configuration."""
        if not isinstance(self.output_directory, Path):
            self.output_directory = Path(self.output_directory)
        self.output_directory = self.output_directory.expanduser()

        if self.env_file is not None and not isinstance(self.env_file, Path):
            self.env_file = Path(self.env_file)

        self.api_url = self.api_url.rstrip("/")


@dataclass
class BackupSummary:
    """
    Outcome of a backup run.

    "Numbers don't lie. Unless they're in a database." — schema.cx
    """

    total: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)

    def record_success(self, path: Path) -> None:
        """Remember an archive that made it to disk."""
        self.written.append(path)

    def record_failure(self, repo: RepositoryDescriptor, error: Exception) -> None:
        """Count a repository whose fetch or write failed."""
        self.failed += 1
        self.errors.append(f"{repo.full_name}: {error}")

    @property
    def succeeded(self) -> int:
        """Repositories backed up without error."""
        return self.total - self.failed

    @property
    def has_failures(self) -> bool:
        """Check if any repository failed."""
        return self.failed > 0
