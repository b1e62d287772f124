"""Read-only patch state inspection."""

import logging

from gst_patcher.models.installation import Installation, PatchState

logger = logging.getLogger(__name__)


def is_patched(install: Installation) -> bool:
    """Check whether the patch marker exists. Read errors count as unpatched."""
    try:
        return install.marker_path.is_file()
    except OSError as e:
        logger.debug(f"Cannot stat marker for {install.name}: {e}")
        return False


def patch_state(install: Installation) -> PatchState:
    return PatchState.PATCHED if is_patched(install) else PatchState.UNPATCHED


def read_marker(install: Installation) -> str | None:
    """Return the marker payload, or None when absent or unreadable."""
    try:
        return install.marker_path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError):
        return None
