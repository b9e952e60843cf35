from __future__ import annotations

from remove_pr_bots.models import CoAuthorLine, SignOffLine
from remove_pr_bots.trailers import (
    is_coauthor_line,
    is_separator_line,
    is_signoff_line,
    parse_coauthor,
    parse_signoff,
    split_lines,
)


def test_split_lines_handles_crlf() -> None:
    assert split_lines("a\r\nb\nc") == ["a", "b", "c"]
    assert split_lines("a\n") == ["a", ""]


def test_coauthor_label() -> None:
    assert is_coauthor_line("Co-authored-by: X <x@y>")
    assert is_coauthor_line("   co-AUTHORED-by:\tX")
    assert not is_coauthor_line("Co-authored-by:X")
    assert not is_coauthor_line("see Co-authored-by: X <x@y>")


def test_parse_coauthor() -> None:
    got = parse_coauthor("Co-authored-by: dependabot[bot] <49699333+dependabot[bot]@users.noreply.github.com>")
    assert got == CoAuthorLine(
        name="dependabot[bot]",
        email="49699333+dependabot[bot]@users.noreply.github.com",
        local="49699333+dependabot[bot]",
    )
    assert parse_coauthor("Co-authored-by: no email here") is None


def test_signoff_label_is_lenient() -> None:
    assert is_signoff_line("Signed-off-by: A <a@b>")
    assert is_signoff_line("signed off by: A <a@b>")
    assert is_signoff_line("  Signed-off by: A <a@b>")
    assert not is_signoff_line("Signed-off-by:A")


def test_parse_signoff() -> None:
    assert parse_signoff("Signed off by:  Alice  <a@b.c> ") == SignOffLine(name="Alice", email="a@b.c")
    assert parse_signoff("Signed-off-by: Alice") is None


def test_separator_line() -> None:
    assert is_separator_line("---")
    assert is_separator_line("  -----  ")
    assert not is_separator_line("--")
    assert not is_separator_line("--- x")
