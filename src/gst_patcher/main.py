"""Entry point for the CrossOver GStreamer Patcher."""

import argparse
import logging
import sys
from pathlib import Path

from gst_patcher.config import Settings
from gst_patcher.console import Console
from gst_patcher.constants import (
    EXIT_BATCH_FAILED,
    EXIT_INVALID_SELECTION,
    EXIT_NO_INSTALLATIONS,
    EXIT_OK,
    EXIT_PRECONDITION_MISSING,
)
from gst_patcher.errors import InvalidSelection, NoInstallationsFound, PreconditionMissing
from gst_patcher.models.installation import Installation, PatchState
from gst_patcher.models.results import ProcessResult
from gst_patcher.services.inspector import patch_state, read_marker
from gst_patcher.services.locator import locate
from gst_patcher.services.patch_controller import PatchController, summarize
from gst_patcher.services.preflight import check_system_framework, running_as_root
from gst_patcher.services.selection import select_targets

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gst-patcher",
        description="Patch CrossOver to use the system-wide GStreamer instead of the bundled one",
    )
    parser.add_argument(
        "--applications-dir",
        type=Path,
        default=None,
        help="Directory searched for CrossOver*.app bundles (default: from config or /Applications)",
    )
    parser.add_argument(
        "--artifact",
        type=Path,
        default=None,
        help="Patched winegstreamer.so to install (default: next to this script)",
    )
    parser.add_argument(
        "--framework-dir",
        type=Path,
        default=None,
        help="System GStreamer framework location (default: /Library/Frameworks/GStreamer.framework)",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--list", action="store_true", help="List installations with their state and exit")
    mode.add_argument("--all", action="store_true", help="Process every installation without prompting")
    mode.add_argument("--select", type=int, metavar="N", help="Process installation number N without prompting")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation when running as root")
    return parser


def settings_from_args(args: argparse.Namespace, settings: Settings | None = None) -> Settings:
    """Overlay command line options on environment-derived settings."""
    settings = settings or Settings()
    overrides = {}
    if args.applications_dir is not None:
        overrides["applications_dir"] = args.applications_dir
    if args.framework_dir is not None:
        overrides["framework_dir"] = args.framework_dir
    if args.artifact is not None:
        overrides["artifact_path"] = args.artifact
    if args.no_color:
        overrides["use_color"] = False
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    return settings.model_copy(update=overrides)


def show_installations(console: Console, installations: list[Installation]) -> None:
    for index, install in enumerate(installations, start=1):
        if patch_state(install) == PatchState.PATCHED:
            marker = read_marker(install)
            suffix = f" ({marker})" if marker else ""
            console.highlight(f"{index}. ✓ {install.name} [PATCHED]{suffix}")
        else:
            console.warning(f"{index}. ○ {install.name} [UNPATCHED]")


def report_result(console: Console, result: ProcessResult) -> None:
    console.info(f"\n=== Processing {result.name} ===")
    if result.success:
        console.success(f"{result.message} ({result.state_after.value.upper()})")
    else:
        console.error(f"{result.name}: {result.message}")
        if result.error_kind == "PartialMutationFailure":
            console.warning("The installation may be incomplete; restore it manually from the backup directory.")


def choose_targets(args: argparse.Namespace, console: Console, installations: list[Installation]) -> list[Installation]:
    """Resolve the selection from flags or from the interactive menu."""
    if args.all:
        return select_targets(installations, "a")
    if args.select is not None:
        return select_targets(installations, str(args.select))

    console.plain()
    console.info("Options:")
    console.info("a) Process all applications")
    console.info("q) Quit")
    choice = console.prompt("Select application number, 'a' for all, or 'q' to quit: ")
    return select_targets(installations, choice)


def run(args: argparse.Namespace, settings: Settings, console: Console) -> int:
    """Execute one patcher session and return the exit code."""
    console.heading("CrossOver GStreamer Patcher")
    console.heading("==========================")

    try:
        framework_dir = check_system_framework(settings.framework_dir)
    except PreconditionMissing as e:
        console.error(str(e))
        return EXIT_PRECONDITION_MISSING
    console.success(f"System GStreamer found at {framework_dir}")

    console.info("\nScanning for CrossOver applications...")
    installations = locate(settings.applications_dir)
    if not installations:
        console.error(str(NoInstallationsFound(settings.applications_dir)))
        return EXIT_NO_INSTALLATIONS

    console.info("\nFound CrossOver applications:")
    show_installations(console, installations)
    if args.list:
        return EXIT_OK

    try:
        targets = choose_targets(args, console, installations)
    except (InvalidSelection, EOFError) as e:
        console.error(str(e) or "Invalid selection")
        return EXIT_INVALID_SELECTION
    except KeyboardInterrupt:
        console.plain()
        console.warning("Exiting...")
        return EXIT_OK

    if not targets:
        console.warning("Exiting...")
        return EXIT_OK

    artifact_path = settings.resolve_artifact_path()
    logger.debug(f"Using replacement binary {artifact_path}")
    controller = PatchController(
        artifact_path=artifact_path,
        on_result=lambda result: report_result(console, result),
    )
    summary = summarize(controller.process_all(targets))

    if not summary.ok:
        console.plain()
        console.error(
            f"{len(summary.failed)} of {len(summary.results)} installation(s) failed: "
            + ", ".join(r.name for r in summary.failed)
        )
        return EXIT_BATCH_FAILED

    console.plain()
    console.success("Operation completed successfully!")
    console.warning("Note: You may need to restart CrossOver for changes to take effect.")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Run the patcher from the command line."""
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args)
    configure_logging(settings.log_level)
    console = Console(use_color=settings.use_color)

    if running_as_root() and not args.yes:
        console.error("Warning: Running as root is not recommended")
        try:
            console.prompt("Press Enter to continue or Ctrl+C to cancel...")
        except (EOFError, KeyboardInterrupt):
            return EXIT_PRECONDITION_MISSING

    return run(args, settings, console)


if __name__ == "__main__":
    sys.exit(main())
