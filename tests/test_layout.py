import pytest

from textedit.layout import (
    GETWIDTH_NEWLINE,
    NEWLINE,
    MonospaceBuffer,
    Row,
    TextBuffer,
    is_space,
)


def test_text_buffer_is_abstract():
    with pytest.raises(TypeError):
        TextBuffer()


def test_newline_constant_is_line_feed():
    assert NEWLINE == ord("\n")
    assert MonospaceBuffer("a\n").char_at(1) == NEWLINE


def test_str_round_trip():
    buf = MonospaceBuffer("hello\nworld")
    assert str(buf) == "hello\nworld"
    assert len(buf) == len("hello\nworld")


def test_accepts_code_points():
    buf = MonospaceBuffer([ord("a"), ord("b")])
    assert str(buf) == "ab"


def test_char_at_returns_code_points():
    buf = MonospaceBuffer("xy")
    assert buf.char_at(0) == ord("x")
    assert buf.char_at(1) == ord("y")


@pytest.mark.parametrize("index", [-1, 2, 10])
def test_char_at_out_of_range(index):
    buf = MonospaceBuffer("xy")
    with pytest.raises(IndexError):
        buf.char_at(index)


@pytest.mark.parametrize("kwargs", [{"char_width": 0}, {"line_height": -1}])
def test_invalid_metrics(kwargs):
    with pytest.raises(ValueError):
        MonospaceBuffer("a", **kwargs)


def test_row_includes_trailing_newline():
    buf = MonospaceBuffer("ab\ncd", char_width=8, line_height=16)
    row = buf.layout_row(0)
    assert row.num_chars == 3
    assert buf.char_at(row.num_chars - 1) == NEWLINE
    assert row.x0 == 0.0
    widths = [buf.char_width(0, i) for i in range(row.num_chars - 1)]
    assert row.x1 == pytest.approx(sum(widths))
    assert row.ymax - row.ymin == pytest.approx(16)
    assert row.baseline_y_delta == pytest.approx(16)


def test_last_row_runs_to_end():
    buf = MonospaceBuffer("ab\ncd")
    first = buf.layout_row(0)
    last = buf.layout_row(first.num_chars)
    assert first.num_chars + last.num_chars == len(buf)
    assert buf.char_at(len(buf) - 1) != NEWLINE


def test_rows_cover_whole_text():
    buf = MonospaceBuffer("one\ntwo\n\nthree")
    start = 0
    rows = []
    while start < len(buf):
        row = buf.layout_row(start)
        assert row.num_chars > 0
        rows.append(row)
        start += row.num_chars
    assert start == len(buf)
    assert len(rows) == str(buf).count("\n") + 1


def test_row_at_end_is_empty():
    buf = MonospaceBuffer("abc")
    row = buf.layout_row(len(buf))
    assert row.num_chars == 0
    assert row.x1 == 0.0


def test_empty_buffer_row():
    buf = MonospaceBuffer("", line_height=5)
    row = buf.layout_row(0)
    assert row == Row(0.0, 0.0, 5.0, 0.0, 5.0, 0)


def test_layout_row_out_of_range():
    with pytest.raises(IndexError):
        MonospaceBuffer("ab").layout_row(3)


def test_newline_width_marker():
    buf = MonospaceBuffer("a\nb", char_width=7)
    assert buf.char_width(0, 1) == GETWIDTH_NEWLINE
    assert buf.char_width(0, 0) == buf.char_width(2, 0)


def test_delete_then_insert_round_trip():
    buf = MonospaceBuffer("hello world")
    removed = [buf.char_at(i) for i in range(5, 11)]
    buf.delete_chars(5, 6)
    assert str(buf) == "hello"
    assert buf.insert_chars(5, removed) is True
    assert str(buf) == "hello world"


def test_insert_string_in_middle():
    buf = MonospaceBuffer("ac")
    assert buf.insert_chars(1, "b")
    assert str(buf) == "abc"


@pytest.mark.parametrize("index,count", [(-1, 1), (2, 5), (0, -1)])
def test_delete_out_of_range(index, count):
    buf = MonospaceBuffer("abc")
    with pytest.raises(IndexError):
        buf.delete_chars(index, count)
    assert str(buf) == "abc"


def test_insert_out_of_range():
    buf = MonospaceBuffer("abc")
    with pytest.raises(IndexError):
        buf.insert_chars(4, "x")


@pytest.mark.parametrize("ch", [" ", "\t", "\n", ord(" "), ord("\n"), 0x3000])
def test_is_space_true(ch):
    assert is_space(ch) is True


@pytest.mark.parametrize("ch", ["a", "_", ord("z"), -1])
def test_is_space_false(ch):
    assert is_space(ch) is False


def test_is_space_rejects_long_string():
    with pytest.raises(ValueError):
        is_space("ab")