"""
Local persistence for the last known voice catalog.

The snapshot is the raw JSON body returned by the voice service, stored
under the project's settings directory so the editor can list voices
without a network round trip.
"""

import logging
import tempfile
from pathlib import Path

from .errors import SnapshotNotFoundError, SnapshotReadError, SnapshotWriteError

logger = logging.getLogger("wit-voice-cache.store")

SETTINGS_DIR_NAME = "ProjectSettings"
SNAPSHOT_FILE_NAME = "wit_voices.json"


def resolve_snapshot_path(project_dir: Path) -> Path:
    """Return the snapshot location for a project.

    Args:
        project_dir: Root directory of the project.

    Returns:
        ``<project_dir>/ProjectSettings/wit_voices.json``
    """
    return Path(project_dir) / SETTINGS_DIR_NAME / SNAPSHOT_FILE_NAME


class SnapshotStore:
    """Reads and writes the voice snapshot file.

    Attributes:
        path: Location of the snapshot file.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    @classmethod
    def for_project(cls, project_dir: Path) -> "SnapshotStore":
        return cls(resolve_snapshot_path(project_dir))

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> str:
        """Read the full snapshot text.

        Raises:
            SnapshotNotFoundError: If no snapshot has been written.
            SnapshotReadError: If the file exists but cannot be read.
        """
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No voice snapshot at %s", self.path)
            raise SnapshotNotFoundError(
                f"Voice snapshot not found: {self.path}", path=self.path
            ) from None
        except (OSError, UnicodeDecodeError) as e:
            raise SnapshotReadError(
                f"Failed to read voice snapshot {self.path}: {e}", path=self.path
            ) from e

        logger.debug("Read voice snapshot (%d chars) from %s", len(content), self.path)
        return content

    def write(self, content: str) -> None:
        """Replace the snapshot with ``content``.

        Writes to a temp file in the same directory and renames it over
        the target, so readers never observe a half-written snapshot.

        Raises:
            SnapshotWriteError: On any I/O failure.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, suffix=".json.tmp", prefix=".wit_voices_",
            )
        except OSError as e:
            raise SnapshotWriteError(
                f"Failed to write voice snapshot {self.path}: {e}", path=self.path
            ) from e

        try:
            with open(fd, "w", encoding="utf-8") as f:
                f.write(content)
            Path(tmp_path).replace(self.path)
        except OSError as e:
            Path(tmp_path).unlink(missing_ok=True)
            raise SnapshotWriteError(
                f"Failed to write voice snapshot {self.path}: {e}", path=self.path
            ) from e

        logger.info("Voice snapshot written: %s", self.path)
