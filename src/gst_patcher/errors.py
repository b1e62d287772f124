"""Exception hierarchy for patch and restore operations."""

from pathlib import Path


class PatchError(Exception):
    """Base class for every error raised by the patcher."""


class PreconditionMissing(PatchError):
    """A host-level requirement for patching is not satisfied."""


class FrameworkMissing(PreconditionMissing):
    """System GStreamer framework is not installed."""

    def __init__(self, framework_dir: Path, download_url: str):
        self.framework_dir = framework_dir
        self.download_url = download_url
        super().__init__(
            f"System GStreamer not found at {framework_dir}. "
            f"Please install GStreamer from: {download_url}"
        )


class ArtifactMissing(PreconditionMissing):
    """Replacement binary is missing or unreadable."""

    def __init__(self, artifact_path: Path):
        self.artifact_path = artifact_path
        super().__init__(
            f"{artifact_path.name} not found or unreadable at {artifact_path}. "
            "Place the patched binary next to the patcher or pass --artifact."
        )


class NoInstallationsFound(PatchError):
    """No matching application bundles were discovered."""

    def __init__(self, search_root: Path):
        self.search_root = search_root
        super().__init__(f"No CrossOver applications found in {search_root}")


class InvalidInstallationLayout(PatchError):
    """An installation lacks a directory the patcher relies on."""

    def __init__(self, root: Path, missing: Path):
        self.root = root
        self.missing = missing
        super().__init__(f"Invalid CrossOver installation {root}: missing {missing}")


class NoBackupFound(PatchError):
    """Restore was requested but the installation has no completed backup."""

    def __init__(self, backup_dir: Path):
        self.backup_dir = backup_dir
        super().__init__(f"No backup found for this installation at {backup_dir}")


class IncompleteBackup(PatchError):
    """The backup lacks copies it records, so restoring would lose originals."""

    def __init__(self, backup_dir: Path, missing: list[str]):
        self.backup_dir = backup_dir
        self.missing = missing
        super().__init__(
            f"Backup at {backup_dir} is incomplete, missing: {', '.join(missing)}. "
            "Nothing was restored; recover these files manually."
        )


class BackupFailure(PatchError):
    """Backup could not be completed. The installation was not modified."""


class PartialMutationFailure(PatchError):
    """A destructive step failed after the backup was taken.

    The installation needs manual recovery from the backup directory.
    """

    def __init__(self, step: str, detail: str, backup_dir: Path | None = None):
        self.step = step
        self.detail = detail
        self.backup_dir = backup_dir
        message = f"Step '{step}' failed: {detail}"
        if backup_dir is not None:
            message += f" (originals are kept in {backup_dir})"
        super().__init__(message)


class InvalidSelection(PatchError, ValueError):
    """Menu choice does not name an installation or a known command."""
