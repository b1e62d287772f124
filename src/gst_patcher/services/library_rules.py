"""Filename rules selecting the bundled GStreamer stack inside lib64."""

from dataclasses import dataclass
from pathlib import Path

from gst_patcher.constants import LIBRARY_RULES


@dataclass(frozen=True)
class LibraryRule:
    """Match names starting with ``prefix`` and ending with ``suffix``.

    An empty suffix means the name must equal the prefix.
    """

    prefix: str
    suffix: str = ""

    def matches(self, name: str) -> bool:
        if not self.suffix:
            return name == self.prefix
        return (
            name.startswith(self.prefix)
            and name.endswith(self.suffix)
            and len(name) >= len(self.prefix) + len(self.suffix)
        )


DEFAULT_RULES: tuple[LibraryRule, ...] = tuple(
    LibraryRule(prefix, suffix) for prefix, suffix in LIBRARY_RULES
)


def is_bundled_library(name: str, rules: tuple[LibraryRule, ...] = DEFAULT_RULES) -> bool:
    """Check whether a lib64 entry name belongs to the bundled GStreamer stack."""
    return any(rule.matches(name) for rule in rules)


def match_library_entries(
    lib64_dir: Path, rules: tuple[LibraryRule, ...] = DEFAULT_RULES
) -> list[str]:
    """List names of entries directly inside ``lib64_dir`` matched by ``rules``.

    Names are grouped by rule order, then sorted, so the result is stable
    across filesystems. A missing directory yields an empty list.
    """
    if not lib64_dir.is_dir():
        return []

    names = [entry.name for entry in lib64_dir.iterdir()]
    matched: list[str] = []
    for rule in rules:
        for name in sorted(names):
            if name not in matched and rule.matches(name):
                matched.append(name)
    return matched
