"""Pytest configuration and fixtures."""

import io
import shutil
import tempfile
from pathlib import Path

import pytest

from tests.fixtures.factories import create_artifact, create_installation

# =============================================================================
# Temp Directory Fixtures
# =============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests. Cleanup after test."""
    tmp = Path(tempfile.mkdtemp(prefix="gst_patcher_test_"))
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def applications_dir(temp_dir):
    """Stand-in for /Applications."""
    path = temp_dir / "Applications"
    path.mkdir()
    return path


@pytest.fixture
def framework_dir(temp_dir):
    """Stand-in for an installed GStreamer.framework."""
    path = temp_dir / "Frameworks" / "GStreamer.framework"
    path.mkdir(parents=True)
    return path


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def mock_settings(applications_dir, framework_dir, artifact, monkeypatch):
    """Create isolated settings pointing at temp directories."""
    for name in ("APPLICATIONS_DIR", "FRAMEWORK_DIR", "ARTIFACT_PATH", "USE_COLOR", "LOG_LEVEL"):
        monkeypatch.delenv(f"GST_PATCHER_{name}", raising=False)

    from gst_patcher.config import Settings

    return Settings(
        applications_dir=applications_dir,
        framework_dir=framework_dir,
        artifact_path=artifact,
        use_color=False,
    )


# =============================================================================
# Installation Fixtures
# =============================================================================


@pytest.fixture
def installation(applications_dir):
    """A single unpatched CrossOver installation."""
    return create_installation(applications_dir)


@pytest.fixture
def artifact(temp_dir):
    """Replacement winegstreamer.so supplied by the operator."""
    tools_dir = temp_dir / "tools"
    tools_dir.mkdir()
    return create_artifact(tools_dir)


@pytest.fixture
def installation_factory(applications_dir):
    """Factory creating installations inside the fake /Applications."""

    def _create(name: str = "CrossOver.app", **kwargs):
        return create_installation(applications_dir, name=name, **kwargs)

    return _create


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def backup_manager():
    from gst_patcher.services.backup_manager import BackupManager

    return BackupManager()


@pytest.fixture
def applier(backup_manager):
    from gst_patcher.services.patch_applier import PatchApplier

    return PatchApplier(backup_manager)


@pytest.fixture
def controller(artifact, backup_manager):
    from gst_patcher.services.patch_controller import PatchController

    return PatchController(artifact_path=artifact, backup_manager=backup_manager)


# =============================================================================
# Console Fixtures
# =============================================================================


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def console_factory(output):
    """Build a colorless Console writing to ``output`` with scripted input."""
    from gst_patcher.console import Console

    def _create(*answers: str):
        pending = list(answers)

        def _input():
            if not pending:
                raise EOFError
            return pending.pop(0)

        return Console(stream=output, use_color=False, input_func=_input)

    return _create
