"""Discovery of CrossOver application bundles."""

import logging
from collections.abc import Callable
from pathlib import Path

from gst_patcher.constants import BUNDLE_SUFFIX, PRODUCT_NAME
from gst_patcher.models.installation import Installation

logger = logging.getLogger(__name__)

NamePredicate = Callable[[str], bool]


def matches_crossover_bundle(name: str) -> bool:
    """Match bundle names starting with "CrossOver" (any case) and ending in ".app"."""
    lowered = name.lower()
    return lowered.startswith(PRODUCT_NAME.lower()) and lowered.endswith(BUNDLE_SUFFIX)


def locate(root: Path, name_predicate: NamePredicate = matches_crossover_bundle) -> list[Installation]:
    """Find installations among the immediate children of ``root``.

    Order follows directory enumeration. An empty list is a normal result,
    also when ``root`` does not exist or cannot be read.
    """
    try:
        children = list(root.iterdir())
    except OSError as e:
        logger.warning(f"Cannot scan {root}: {e}")
        return []

    installations = []
    for child in children:
        if not name_predicate(child.name):
            continue
        try:
            if not child.is_dir():
                continue
        except OSError:
            continue
        installations.append(Installation.from_path(child))

    logger.debug(f"Found {len(installations)} installation(s) in {root}")
    return installations
