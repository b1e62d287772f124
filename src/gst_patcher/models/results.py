"""Per-installation outcome models reported by the controller."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from gst_patcher.models.installation import PatchState


class PatchAction(str, Enum):
    """Transition attempted for an installation."""

    APPLY = "apply"
    RESTORE = "restore"
    NONE = "none"  # Nothing attempted (layout check failed)


class ProcessResult(BaseModel):
    """Outcome of processing one installation."""

    name: str
    root: Path
    action: PatchAction
    state_before: PatchState | None = None
    state_after: PatchState | None = None
    success: bool
    error_kind: str | None = None
    message: str = ""


class BatchSummary(BaseModel):
    """Aggregate of a batch run."""

    results: list[ProcessResult] = Field(default_factory=list)

    @property
    def succeeded(self) -> list[ProcessResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> list[ProcessResult]:
        return [r for r in self.results if not r.success]

    @property
    def ok(self) -> bool:
        """True when every processed installation succeeded."""
        return not self.failed
