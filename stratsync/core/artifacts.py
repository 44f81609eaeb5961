"""Single-slot owner of the rendered summary document.

Each published summary is backed by a temporary ``.html`` file. Only one
file is alive at a time: publishing a new summary writes the new file and
then deletes the one it replaces. Nothing else in the client creates or
deletes these files.
"""

import logging
import os
import tempfile
from pathlib import Path

from stratsync.models.schemas import SummaryArtifact

logger = logging.getLogger(__name__)


class ArtifactManager:
    """Manages the lifecycle of the active summary artifact."""

    def __init__(self, directory: Path | None = None) -> None:
        """Initialize the artifact manager.

        Args:
            directory: Where summary files are written.
                       Uses the system temp directory if not provided.
        """
        self._directory = directory
        self._current: SummaryArtifact | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def publish(self, document: str, message_id: int) -> SummaryArtifact | None:
        """Make ``document`` the active summary for ``message_id``.

        The previous artifact, if any, is released right after the new file
        is written. If writing fails the previous artifact stays active. A
        file that cannot be deleted is logged and does not undo the publish.

        Args:
            document: Sanitized HTML text.
            message_id: The message the summary belongs to.

        Returns:
            The newly active artifact, or None once the manager is closed.

        Raises:
            OSError: If the backing file could not be written.
        """
        if self._closed:
            logger.info(f"Discarded summary for message {message_id}: manager closed")
            return None

        path = self._write(document)
        previous = self._current
        self._current = SummaryArtifact(message_id=message_id, document=document, path=path)
        if previous is not None:
            self._destroy(previous)

        logger.info(f"Published summary for message {message_id} at {path}")
        return self._current

    def current_artifact(self) -> SummaryArtifact | None:
        return self._current

    def artifact_for(self, message_id: int) -> SummaryArtifact | None:
        """Return the active artifact if it belongs to ``message_id``."""
        if self._current is not None and self._current.message_id == message_id:
            return self._current
        return None

    def release(self) -> None:
        """Drop the active artifact and delete its backing file."""
        previous, self._current = self._current, None
        if previous is not None:
            self._destroy(previous)

    def close(self) -> None:
        """Release the active artifact and refuse any later publish."""
        self._closed = True
        self.release()

    def _write(self, document: str) -> Path:
        if self._directory is not None:
            self._directory.mkdir(parents=True, exist_ok=True)
        fd, name = tempfile.mkstemp(prefix="summary-", suffix=".html", dir=self._directory)
        os.close(fd)
        path = Path(name)
        try:
            path.write_text(document, encoding="utf-8")
        except OSError:
            path.unlink(missing_ok=True)
            raise
        return path

    def _destroy(self, artifact: SummaryArtifact) -> None:
        try:
            artifact.path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Failed to delete summary file {artifact.path}: {e}")
            return
        logger.debug(f"Released summary for message {artifact.message_id}")
