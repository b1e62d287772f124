"""Per-installation state machine and batch processing."""

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from gst_patcher.errors import InvalidInstallationLayout, PatchError
from gst_patcher.models.installation import Installation, PatchState
from gst_patcher.models.results import BatchSummary, PatchAction, ProcessResult
from gst_patcher.services.backup_manager import BackupManager
from gst_patcher.services.inspector import patch_state
from gst_patcher.services.patch_applier import PatchApplier

logger = logging.getLogger(__name__)

ResultCallback = Callable[[ProcessResult], None]


class PatchController:
    """Toggles installations between UNPATCHED and PATCHED.

    UNPATCHED installations are patched, PATCHED ones are restored. Errors
    from a single installation are recorded in its result and never stop a
    batch.
    """

    def __init__(
        self,
        artifact_path: Path,
        backup_manager: BackupManager | None = None,
        applier: PatchApplier | None = None,
        on_result: ResultCallback | None = None,
    ):
        self.artifact_path = artifact_path
        self.backup_manager = backup_manager or BackupManager()
        self.applier = applier or PatchApplier(self.backup_manager)
        self.on_result = on_result

    def process(self, install: Installation) -> ProcessResult:
        """Run the transition matching the current state of ``install``."""
        if not install.has_valid_layout():
            error = InvalidInstallationLayout(install.root, install.support_dir)
            logger.error(str(error))
            return self._failure(install, PatchAction.NONE, None, error)

        before = patch_state(install)
        action = PatchAction.RESTORE if before == PatchState.PATCHED else PatchAction.APPLY
        logger.info(f"Processing {install.name}: {before.value} -> {action.value}")

        try:
            if action == PatchAction.APPLY:
                self.applier.apply(install, self.artifact_path)
            else:
                self.backup_manager.restore(install)
        except PatchError as e:
            logger.error(f"{action.value} failed for {install.name}: {e}")
            return self._failure(install, action, before, e)

        after = patch_state(install)
        message = "GStreamer patch applied" if action == PatchAction.APPLY else "Restored from backup"
        return ProcessResult(
            name=install.name,
            root=install.root,
            action=action,
            state_before=before,
            state_after=after,
            success=True,
            message=message,
        )

    def process_all(self, installs: Iterable[Installation]) -> list[ProcessResult]:
        """Process installations one after another, collecting every outcome."""
        results = []
        for install in installs:
            result = self.process(install)
            results.append(result)
            if self.on_result is not None:
                self.on_result(result)
        return results

    def _failure(
        self,
        install: Installation,
        action: PatchAction,
        before: PatchState | None,
        error: PatchError,
    ) -> ProcessResult:
        after = patch_state(install) if before is not None else None
        return ProcessResult(
            name=install.name,
            root=install.root,
            action=action,
            state_before=before,
            state_after=after,
            success=False,
            error_kind=type(error).__name__,
            message=str(error),
        )


def summarize(results: Iterable[ProcessResult]) -> BatchSummary:
    return BatchSummary(results=list(results))
