"""Backup and restore of the files a patch removes or overwrites."""

import filecmp
import json
import logging
import shutil
from pathlib import Path

from pydantic import ValidationError

from gst_patcher.errors import BackupFailure, IncompleteBackup, NoBackupFound, PartialMutationFailure
from gst_patcher.models.installation import BackupSet, Installation
from gst_patcher.services.library_rules import DEFAULT_RULES, LibraryRule, match_library_entries

logger = logging.getLogger(__name__)


def entry_exists(path: Path) -> bool:
    """Like ``Path.exists`` but true for dangling symlinks too."""
    return path.is_symlink() or path.exists()


def copy_entry(src: Path, dst: Path) -> None:
    """Copy a file, symlink or directory tree, keeping symlinks as links."""
    if src.is_dir() and not src.is_symlink():
        shutil.copytree(src, dst, symlinks=True)
    else:
        shutil.copy2(src, dst, follow_symlinks=False)


def remove_entry(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink(missing_ok=True)


def _same_content(path: Path, other: Path | None) -> bool:
    if other is None or not other.is_file():
        return False
    try:
        return filecmp.cmp(path, other, shallow=False)
    except OSError:
        return False


class BackupManager:
    """Creates and restores the backup stored inside each installation.

    The backup lives at ``<support_dir>/gstreamer-backup`` and mirrors the
    live layout (``lib64/*`` and ``lib/wine/x86_64-unix/winegstreamer.so``),
    so it travels with the application bundle.
    """

    def __init__(self, rules: tuple[LibraryRule, ...] = DEFAULT_RULES):
        self.rules = rules

    def has_backup(self, install: Installation) -> bool:
        return install.backup_dir.is_dir()

    def matched_entries(self, install: Installation) -> list[str]:
        """Names of live lib64 entries belonging to the bundled GStreamer stack."""
        return match_library_entries(install.lib64_dir, self.rules)

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    def create_backup(self, install: Installation, artifact_path: Path | None = None) -> BackupSet:
        """Capture every file the patch is about to delete or overwrite.

        Returns only after the backup is complete. Raises BackupFailure, with
        the installation untouched, if anything cannot be copied.
        ``artifact_path`` lets a reused backup tell an already installed
        replacement binary apart from the original one.
        """
        self._discard_staging(install)

        if self.has_backup(install):
            return self._extend_backup(install, artifact_path)

        staging = install.staging_backup_dir
        backup = BackupSet(root=staging)
        try:
            backup.lib64_dir.mkdir(parents=True, exist_ok=True)
            backup.replaceable_binary.parent.mkdir(parents=True, exist_ok=True)

            for name in self.matched_entries(install):
                copy_entry(install.lib64_dir / name, backup.lib64_dir / name)
                backup.library_entries.append(name)

            if install.replaceable_binary.is_file():
                shutil.copy2(install.replaceable_binary, backup.replaceable_binary)
                backup.binary_captured = True

            self._write_manifest(backup)
            staging.rename(install.backup_dir)
        except OSError as e:
            logger.error(f"Backup of {install.name} failed: {e}")
            shutil.rmtree(staging, ignore_errors=True)
            raise BackupFailure(f"Could not back up {install.name}: {e}") from e

        backup.root = install.backup_dir
        logger.info(
            f"Backup created at {backup.root} "
            f"({len(backup.library_entries)} libraries, binary={backup.binary_captured})"
        )
        return backup

    def _extend_backup(self, install: Installation, artifact_path: Path | None) -> BackupSet:
        """Reuse a backup left by an interrupted apply or a failed cleanup.

        Only copies present on disk count as backed up, whatever the manifest
        says. Copies already there are originals and are never overwritten.
        Live entries without a copy are added so the deletion set stays
        covered, and so is a live binary that is not the replacement artifact.
        """
        backup = self.load_backup(install)

        present = [name for name in backup.library_entries if entry_exists(backup.lib64_dir / name)]
        lost = [name for name in backup.library_entries if name not in present]
        if lost:
            logger.warning(f"Backup at {backup.root} lacks recorded entries {lost}, recapturing from live files")
        backup.library_entries = present

        missing = [name for name in self.matched_entries(install) if name not in present]
        logger.warning(
            f"Reusing existing backup at {backup.root} for {install.name}; "
            f"adding {len(missing)} new entr{'y' if len(missing) == 1 else 'ies'}"
        )

        for name in missing:
            target = backup.lib64_dir / name
            try:
                backup.lib64_dir.mkdir(parents=True, exist_ok=True)
                copy_entry(install.lib64_dir / name, target)
            except OSError as e:
                if entry_exists(target):
                    remove_entry(target)
                raise BackupFailure(f"Could not add {name} to backup of {install.name}: {e}") from e
            backup.library_entries.append(name)

        live_binary = install.replaceable_binary
        if backup.replaceable_binary.is_file():
            backup.binary_captured = True
        elif live_binary.is_file() and not _same_content(live_binary, artifact_path):
            logger.warning(f"Backup at {backup.root} has no {live_binary.name}, capturing the live one")
            try:
                backup.replaceable_binary.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(live_binary, backup.replaceable_binary)
            except OSError as e:
                backup.replaceable_binary.unlink(missing_ok=True)
                raise BackupFailure(f"Could not add {live_binary.name} to backup of {install.name}: {e}") from e
            backup.binary_captured = True
        else:
            backup.binary_captured = False

        try:
            self._write_manifest(backup)
        except OSError as e:
            raise BackupFailure(f"Could not update backup manifest of {install.name}: {e}") from e
        return backup

    def _discard_staging(self, install: Installation) -> None:
        staging = install.staging_backup_dir
        if entry_exists(staging):
            logger.warning(f"Discarding incomplete backup at {staging}")
            try:
                remove_entry(staging)
            except OSError as e:
                raise BackupFailure(f"Could not remove incomplete backup {staging}: {e}") from e

    def _write_manifest(self, backup: BackupSet) -> None:
        backup.manifest_path.write_text(
            backup.model_dump_json(indent=2, exclude={"root"}), encoding="utf-8"
        )

    # -------------------------------------------------------------------------
    # Load
    # -------------------------------------------------------------------------

    def load_backup(self, install: Installation) -> BackupSet:
        """Read the completed backup of an installation.

        Backups without a manifest (written by older shell-based releases)
        are described by walking the mirrored tree.
        """
        backup_dir = install.backup_dir
        if not backup_dir.is_dir():
            raise NoBackupFound(backup_dir)

        manifest_path = BackupSet(root=backup_dir).manifest_path
        if manifest_path.is_file():
            try:
                data = json.loads(manifest_path.read_text(encoding="utf-8"))
                return BackupSet.model_validate({**data, "root": backup_dir})
            except (OSError, json.JSONDecodeError, ValidationError) as e:
                logger.warning(f"Ignoring unreadable backup manifest {manifest_path}: {e}")

        backup = BackupSet(root=backup_dir)
        if backup.lib64_dir.is_dir():
            backup.library_entries = sorted(entry.name for entry in backup.lib64_dir.iterdir())
        backup.binary_captured = backup.replaceable_binary.is_file()
        return backup

    # -------------------------------------------------------------------------
    # Restore
    # -------------------------------------------------------------------------

    def restore(self, install: Installation) -> BackupSet:
        """Put the backed up files back, clear the marker, then drop the backup.

        Raises NoBackupFound when there is nothing to restore and
        IncompleteBackup, before touching anything, when recorded copies are
        missing. Failing to delete the backup afterwards is only logged.
        """
        backup = self.load_backup(install)

        missing = [name for name in backup.library_entries if not entry_exists(backup.lib64_dir / name)]
        if backup.binary_captured and not backup.replaceable_binary.is_file():
            missing.append(backup.replaceable_binary.name)
        if missing:
            logger.error(f"Backup of {install.name} at {backup.root} is missing {missing}")
            raise IncompleteBackup(backup.root, missing)

        logger.info(f"Restoring {install.name} from {backup.root}")

        for name in backup.library_entries:
            src = backup.lib64_dir / name
            dst = install.lib64_dir / name
            try:
                install.lib64_dir.mkdir(parents=True, exist_ok=True)
                if entry_exists(dst):
                    remove_entry(dst)
                copy_entry(src, dst)
            except OSError as e:
                logger.error(f"Restoring {name} into {install.name} failed: {e}")
                raise PartialMutationFailure("restore-libraries", f"{name}: {e}", backup.root) from e

        binary = install.replaceable_binary
        try:
            if backup.binary_captured:
                binary.parent.mkdir(parents=True, exist_ok=True)
                if binary.is_symlink():
                    binary.unlink()
                shutil.copy2(backup.replaceable_binary, binary)
            elif entry_exists(binary):
                # Not present before patching
                binary.unlink()
        except OSError as e:
            logger.error(f"Restoring {binary.name} into {install.name} failed: {e}")
            raise PartialMutationFailure("restore-binary", str(e), backup.root) from e

        try:
            install.marker_path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Could not remove patch marker of {install.name}: {e}")
            raise PartialMutationFailure("clear-marker", str(e), backup.root) from e

        try:
            shutil.rmtree(backup.root)
        except OSError as e:
            logger.warning(f"Restore succeeded but backup {backup.root} could not be removed: {e}")

        logger.info(f"Restored {install.name}")
        return backup
