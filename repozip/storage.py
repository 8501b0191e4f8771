"""
Archive persistence.

"A backup you can't find is just a rumor." — schema.cx
"""

from pathlib import Path

from .errors import ArchiveWriteError
from .models import ArchivePayload
from .validation import ValidationError, validate_archive_name

ARCHIVE_SUFFIX = ".zip"


def archive_destination(repository_name: str, output_directory: Path | str) -> Path:
    """Get the file an archive is written to: <dir>/<name>.zip."""
    return Path(output_directory) / f"{repository_name}{ARCHIVE_SUFFIX}"


class ArchiveWriter:
    """
    Writes archive payloads to disk.

    Existing files are replaced. A failed write may leave a partial file.
    """

    def check_name(self, repository_name: str) -> None:
        """
        Reject names that cannot be used as <name>.zip.

        Raises:
            ArchiveWriteError: If the name is unsafe
        """
        try:
            validate_archive_name(repository_name)
        except ValidationError as e:
            raise ArchiveWriteError(str(e)) from e

    def write(self, payload: ArchivePayload, output_directory: Path | str) -> Path:
        """
        Write ``payload`` under ``output_directory``.

        Returns:
            The path written

        Raises:
            ArchiveWriteError: If the name is unsafe, the directory is
                missing or unwritable, or the write fails
        """
        self.check_name(payload.repository_name)

        directory = Path(output_directory)
        destination = archive_destination(payload.repository_name, directory)

        if not directory.is_dir():
            raise ArchiveWriteError(f"Output directory does not exist: {directory}", path=str(destination))

        try:
            with open(destination, "wb") as f:
                f.write(payload.content)
        except OSError as e:
            raise ArchiveWriteError(f"Could not write {destination}: {e}", path=str(destination)) from e

        return destination
