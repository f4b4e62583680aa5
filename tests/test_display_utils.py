"""Tests for terminal display helpers."""

from groupexport.utils.display_utils import (
    finish_progress,
    print_section_header,
    print_success,
    print_warning,
    show_progress,
)


def test_show_progress_is_indeterminate(capsys):
    show_progress(400, 2)
    finish_progress()

    err = capsys.readouterr().err
    assert err.startswith("\rExporting: 400 members (page 2)")
    assert err.endswith("\n")
    assert "%" not in err


def test_messages(capsys):
    print_warning("careful")
    print_success("done")
    print_section_header("Attributes")

    captured = capsys.readouterr()
    assert "WARNING: careful" in captured.err
    assert "SUCCESS: done" in captured.out
    assert "Attributes" in captured.out
