"""Installation and backup domain models."""

from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from gst_patcher.constants import (
    BACKUP_DIRNAME,
    BACKUP_MANIFEST_FILENAME,
    LIB64_SUBPATH,
    MARKER_FILENAME,
    REPLACEABLE_BINARY_NAME,
    STAGING_BACKUP_DIRNAME,
    SUPPORT_SUBPATH,
    WINE_UNIX_SUBPATH,
)


class PatchState(str, Enum):
    """Patch state of one installation."""

    UNPATCHED = "unpatched"  # Bundled GStreamer in place
    PATCHED = "patched"  # Bundled GStreamer removed, system GStreamer used


class Installation(BaseModel):
    """One CrossOver application bundle found on disk.

    Discovered fresh on every run and never persisted. All other paths are
    derived from ``root``.
    """

    model_config = ConfigDict(frozen=True)

    root: Path
    name: str

    @classmethod
    def from_path(cls, root: Path) -> "Installation":
        return cls(root=root, name=root.name)

    @property
    def support_dir(self) -> Path:
        return self.root.joinpath(*SUPPORT_SUBPATH)

    @property
    def lib64_dir(self) -> Path:
        return self.support_dir.joinpath(*LIB64_SUBPATH)

    @property
    def wine_unix_dir(self) -> Path:
        return self.support_dir.joinpath(*WINE_UNIX_SUBPATH)

    @property
    def replaceable_binary(self) -> Path:
        return self.wine_unix_dir / REPLACEABLE_BINARY_NAME

    @property
    def marker_path(self) -> Path:
        return self.support_dir / MARKER_FILENAME

    @property
    def backup_dir(self) -> Path:
        return self.support_dir / BACKUP_DIRNAME

    @property
    def staging_backup_dir(self) -> Path:
        return self.support_dir / STAGING_BACKUP_DIRNAME

    def has_valid_layout(self) -> bool:
        """Check that the shared support directory exists."""
        try:
            return self.support_dir.is_dir()
        except OSError:
            return False


class BackupSet(BaseModel):
    """Files captured from an installation before it is patched.

    ``library_entries`` are names directly inside ``lib64`` (files or
    directories). ``binary_captured`` is False when the installation had no
    replaceable binary at capture time.
    """

    root: Path
    library_entries: list[str] = Field(default_factory=list)
    binary_captured: bool = False
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def lib64_dir(self) -> Path:
        return self.root.joinpath(*LIB64_SUBPATH)

    @property
    def replaceable_binary(self) -> Path:
        return self.root.joinpath(*WINE_UNIX_SUBPATH, REPLACEABLE_BINARY_NAME)

    @property
    def manifest_path(self) -> Path:
        return self.root / BACKUP_MANIFEST_FILENAME

    def is_empty(self) -> bool:
        return not self.library_entries and not self.binary_captured
