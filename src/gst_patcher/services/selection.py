"""Menu choice to installation selection, without any terminal I/O."""

from collections.abc import Sequence

from gst_patcher.errors import InvalidSelection
from gst_patcher.models.installation import Installation

QUIT_CHOICES = {"q"}
ALL_CHOICES = {"a"}


def select_targets(installations: Sequence[Installation], choice: str) -> list[Installation]:
    """Translate a menu choice into the installations to process.

    ``q`` selects nothing, ``a`` selects everything and a 1-based number
    selects that installation. Anything else raises InvalidSelection.
    """
    normalized = choice.strip().lower()

    if normalized in QUIT_CHOICES:
        return []
    if normalized in ALL_CHOICES:
        return list(installations)
    if normalized.isdigit():
        index = int(normalized)
        if 1 <= index <= len(installations):
            return [installations[index - 1]]
    raise InvalidSelection(f"Invalid selection: {choice.strip()!r}")
