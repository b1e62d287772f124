"""CrossOver GStreamer Patcher - toggle CrossOver between bundled and system GStreamer."""

__version__ = "1.0.0"
