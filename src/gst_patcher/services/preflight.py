"""Host checks run before any installation is touched."""

import logging
import os
from pathlib import Path

from gst_patcher.constants import GSTREAMER_DOWNLOAD_URL
from gst_patcher.errors import FrameworkMissing

logger = logging.getLogger(__name__)


def check_system_framework(framework_dir: Path) -> Path:
    """Ensure the system GStreamer framework is installed."""
    if not framework_dir.is_dir():
        raise FrameworkMissing(framework_dir, GSTREAMER_DOWNLOAD_URL)
    logger.debug(f"System GStreamer found at {framework_dir}")
    return framework_dir


def running_as_root() -> bool:
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0
