"""Tests for terminal output."""

import io

from colorama import Fore, Style

from gst_patcher.console import Console


def test_plain_output_without_color():
    stream = io.StringIO()
    console = Console(stream=stream, use_color=False)

    console.success("done")
    console.error("broken")

    assert stream.getvalue() == "✓ done\n✗ broken\n"


def test_colored_output():
    stream = io.StringIO()
    console = Console(stream=stream, use_color=True)

    console.warning("careful")

    assert stream.getvalue() == f"{Fore.YELLOW}careful{Style.RESET_ALL}\n"


def test_plain_never_colored():
    stream = io.StringIO()
    console = Console(stream=stream, use_color=True)

    console.plain("text")

    assert stream.getvalue() == "text\n"


def test_prompt_reads_input():
    stream = io.StringIO()
    console = Console(stream=stream, use_color=False, input_func=lambda: "a")

    answer = console.prompt("Choose: ")

    assert answer == "a"
    assert stream.getvalue() == "Choose: "
