"""Configuration settings for the GStreamer patcher."""

import sys
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from gst_patcher.constants import (
    DEFAULT_APPLICATIONS_DIR,
    DEFAULT_FRAMEWORK_DIR,
    REPLACEABLE_BINARY_NAME,
)


class Settings(BaseSettings):
    """Patcher settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="GST_PATCHER_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Where CrossOver bundles are searched (one level deep)
    applications_dir: Path = Path(DEFAULT_APPLICATIONS_DIR)

    # System GStreamer must be present before anything is patched
    framework_dir: Path = Path(DEFAULT_FRAMEWORK_DIR)

    # Patched winegstreamer.so; defaults to the file next to the launcher
    artifact_path: Path | None = None

    # Terminal output
    use_color: bool = True
    log_level: str = "WARNING"

    def resolve_artifact_path(self) -> Path:
        """Return the configured artifact or the one beside the launched script."""
        if self.artifact_path is not None:
            return self.artifact_path.expanduser()
        launcher = Path(sys.argv[0]).resolve() if sys.argv and sys.argv[0] else Path.cwd()
        base_dir = launcher.parent if launcher.is_file() else Path.cwd()
        return base_dir / REPLACEABLE_BINARY_NAME
