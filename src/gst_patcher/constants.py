"""Centralized constants for the gst_patcher application.

Names and relative paths below mirror the layout of a CrossOver application
bundle and must stay compatible with backups made by earlier releases.
"""

# =============================================================================
# PRODUCT
# =============================================================================

PRODUCT_NAME = "CrossOver"
BUNDLE_SUFFIX = ".app"

DEFAULT_APPLICATIONS_DIR = "/Applications"
DEFAULT_FRAMEWORK_DIR = "/Library/Frameworks/GStreamer.framework"
GSTREAMER_DOWNLOAD_URL = "https://gstreamer.freedesktop.org/download/"

# =============================================================================
# BUNDLE LAYOUT (relative to the installation root)
# =============================================================================

SUPPORT_SUBPATH = ("Contents", "SharedSupport", PRODUCT_NAME)

# Relative to the support directory
LIB64_SUBPATH = ("lib64",)
WINE_UNIX_SUBPATH = ("lib", "wine", "x86_64-unix")

REPLACEABLE_BINARY_NAME = "winegstreamer.so"

# =============================================================================
# PATCH STATE
# =============================================================================

MARKER_FILENAME = ".gstreamer_patch_applied"
MARKER_PAYLOAD_PREFIX = "GStreamer patch applied on"

BACKUP_DIRNAME = "gstreamer-backup"
# Backups are assembled here and renamed onto BACKUP_DIRNAME once complete
STAGING_BACKUP_DIRNAME = ".gstreamer-backup.partial"
BACKUP_MANIFEST_FILENAME = "manifest.json"

# =============================================================================
# LIBRARY RULES
# =============================================================================
# GStreamer plus the GLib stack it drags in. Each entry is (prefix, suffix);
# an empty suffix means the name must match exactly.

LIBRARY_RULES = (
    ("libgst", ".dylib"),
    ("libgio-2.0", ".dylib"),
    ("libglib-2.0", ".dylib"),
    ("libgmodule-2.0", ".dylib"),
    ("libgobject-2.0", ".dylib"),
    ("libgthread-2.0", ".dylib"),
    ("libffi", ".dylib"),
    ("libintl", ".dylib"),
    ("libpcre2", ".dylib"),
    ("gstreamer-1.0", ""),
)

# =============================================================================
# CLI EXIT CODES
# =============================================================================

EXIT_OK = 0
EXIT_PRECONDITION_MISSING = 1
EXIT_NO_INSTALLATIONS = 2
EXIT_BATCH_FAILED = 3
EXIT_INVALID_SELECTION = 4
