"""Apply the system GStreamer patch to one installation."""

import logging
import os
import shutil
from datetime import datetime
from pathlib import Path

from gst_patcher.constants import MARKER_PAYLOAD_PREFIX
from gst_patcher.errors import ArtifactMissing, InvalidInstallationLayout, PartialMutationFailure
from gst_patcher.models.installation import BackupSet, Installation
from gst_patcher.services.backup_manager import BackupManager, entry_exists, remove_entry

logger = logging.getLogger(__name__)


def marker_payload(now: datetime | None = None) -> str:
    return f"{MARKER_PAYLOAD_PREFIX} {(now or datetime.now()).ctime()}\n"


def check_artifact(artifact_path: Path) -> None:
    """Raise ArtifactMissing unless the replacement binary is a readable file."""
    if not artifact_path.is_file() or not os.access(artifact_path, os.R_OK):
        raise ArtifactMissing(artifact_path)


class PatchApplier:
    """Removes bundled GStreamer libraries and installs the replacement binary."""

    def __init__(self, backup_manager: BackupManager | None = None):
        self.backup_manager = backup_manager or BackupManager()

    def apply(self, install: Installation, artifact_path: Path) -> BackupSet:
        """Patch ``install`` with ``artifact_path``.

        Nothing is modified until the artifact and layout checks pass and the
        backup is complete. Only entries recorded in the backup are deleted.
        """
        check_artifact(artifact_path)
        for required in (install.lib64_dir, install.wine_unix_dir):
            if not required.is_dir():
                raise InvalidInstallationLayout(install.root, required)

        backup = self.backup_manager.create_backup(install, artifact_path)

        logger.info(f"Removing bundled GStreamer libraries from {install.lib64_dir}")
        for name in backup.library_entries:
            target = install.lib64_dir / name
            if not entry_exists(target):
                continue
            try:
                remove_entry(target)
            except OSError as e:
                logger.error(f"Removing {name} from {install.name} failed: {e}")
                raise PartialMutationFailure("remove-libraries", f"{name}: {e}", backup.root) from e
            logger.debug(f"Removed {target}")

        binary = install.replaceable_binary
        try:
            if binary.is_symlink():
                binary.unlink()
            shutil.copy2(artifact_path, binary)
        except OSError as e:
            logger.error(f"Replacing {binary} in {install.name} failed: {e}")
            raise PartialMutationFailure("replace-binary", str(e), backup.root) from e
        logger.info(f"Replaced {binary}")

        try:
            install.marker_path.write_text(marker_payload(), encoding="utf-8")
        except OSError as e:
            logger.error(f"Writing patch marker for {install.name} failed: {e}")
            raise PartialMutationFailure("write-marker", str(e), backup.root) from e

        logger.info(f"GStreamer patch applied to {install.name}")
        return backup
