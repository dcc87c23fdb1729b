from __future__ import annotations

from iesrescale.parser.line_cursor import LineCursor


def test_next_line_strips_crlf_and_counts_lines() -> None:
    c = LineCursor(b"IESNA91\r\nTILT=NONE\r\n")
    assert c.next_line() == "IESNA91"
    assert c.line_no == 1
    assert c.next_line() == "TILT=NONE"
    assert c.line_no == 2
    assert c.next_line() is None
    assert c.at_end


def test_last_line_without_terminator_is_returned() -> None:
    c = LineCursor(b"a\nb")
    assert c.next_line() == "a"
    assert c.next_line() == "b"
    assert c.next_line() is None


def test_blank_lines_are_returned_as_empty_strings() -> None:
    c = LineCursor(b"a\n\nb\n")
    assert [c.next_line(), c.next_line(), c.next_line(), c.next_line()] == ["a", "", "b", None]


def test_rewind_rereads_first_line() -> None:
    c = LineCursor(b"first\nsecond\n")
    assert c.next_line() == "first"
    c.rewind()
    assert c.line_no == 0
    assert c.next_line() == "first"
    assert c.next_line() == "second"


def test_only_one_trailing_carriage_return_is_stripped() -> None:
    c = LineCursor(b"x\r\r\n")
    assert c.next_line() == "x\r"


def test_empty_buffer() -> None:
    c = LineCursor(b"")
    assert c.is_blank()
    assert c.next_line() is None
    assert LineCursor(b" \n\t\n").is_blank()
