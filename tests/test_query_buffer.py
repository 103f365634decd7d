from typing import List

import pytest

from menu_engine.buffer import BufferValidationError, QueryBuffer
from menu_engine.buffer import query as query_module
from menu_engine.buffer.validation import is_boundary


def make_buffer(text: str = "", **kwargs) -> QueryBuffer:
    buffer = QueryBuffer(**kwargs)
    if text:
        buffer.insert(text)
    return buffer


def test_insert_advances_cursor_in_bytes() -> None:
    buffer = make_buffer("héllo")

    assert buffer.text == "héllo"
    assert buffer.cursor == 6
    assert buffer.snapshot().column == 5


def test_insert_at_cursor_position() -> None:
    buffer = make_buffer("ac")
    buffer.move_cursor(-1)

    buffer.insert("b")

    assert buffer.text == "abc"
    assert buffer.cursor == 2


def test_backspace_removes_whole_code_point() -> None:
    buffer = make_buffer("aé")

    delta = buffer.backspace()

    assert delta.applied
    assert buffer.text == "a"
    assert buffer.cursor == 1


def test_backspace_at_start_is_noop() -> None:
    buffer = make_buffer("abc")
    buffer.move_to_start()

    assert not buffer.backspace().applied
    assert buffer.text == "abc"


def test_delete_forward_removes_code_point_right() -> None:
    buffer = make_buffer("€x")
    buffer.move_to_start()

    buffer.delete_forward()

    assert buffer.text == "x"
    assert buffer.cursor == 0
    assert not make_buffer("abc").delete_forward().applied


def test_cursor_moves_by_code_point() -> None:
    buffer = make_buffer("aé")

    assert buffer.move_cursor(-1)
    assert buffer.cursor == 1
    assert buffer.move_cursor(-1)
    assert buffer.cursor == 0
    assert not buffer.move_cursor(-1)
    assert buffer.move_cursor(+1)
    assert buffer.move_cursor(+1)
    assert buffer.cursor == 3
    assert not buffer.move_cursor(+1)


def test_capacity_overflow_is_rejected_without_change() -> None:
    changes: List[str] = []
    buffer = make_buffer("abcd", capacity=5)
    buffer.on_change = lambda buf: changes.append(buf.text)

    delta = buffer.insert("é")

    assert not delta.applied
    assert buffer.text == "abcd"
    assert buffer.cursor == 4
    assert changes == []
    assert buffer.insert("e").applied
    assert buffer.text == "abcde"


def test_kill_to_end_and_start() -> None:
    buffer = make_buffer("hello world")
    buffer.set_cursor(5)

    buffer.kill_to_end()
    assert buffer.text == "hello"

    buffer.move_cursor(-1)
    buffer.kill_to_start()
    assert buffer.text == "o"
    assert buffer.cursor == 0


def test_delete_word_left_skips_trailing_delimiters() -> None:
    buffer = make_buffer("foo bar  ")

    buffer.delete_word_left()

    assert buffer.text == "foo "
    assert buffer.cursor == 4


def test_delete_word_left_respects_custom_delimiters() -> None:
    buffer = make_buffer("usr/local/bin", delimiters="/")

    buffer.delete_word_left()

    assert buffer.text == "usr/local/"


def test_word_movement_in_both_directions() -> None:
    buffer = make_buffer("foo bar baz")
    buffer.move_to_start()

    assert buffer.move_word_edge(+1)
    assert buffer.cursor == 3
    assert buffer.move_word_edge(+1)
    assert buffer.cursor == 7
    assert buffer.move_word_edge(-1)
    assert buffer.cursor == 4
    buffer.move_to_start()
    assert not buffer.move_word_edge(-1)


def test_paste_keeps_first_line_only() -> None:
    buffer = make_buffer("> ")

    buffer.paste("one\ntwo")

    assert buffer.text == "> one"


def test_set_text_replaces_query_and_moves_cursor_to_end() -> None:
    buffer = make_buffer("abc")

    buffer.set_text("xyz€")

    assert buffer.text == "xyz€"
    assert buffer.cursor == len("xyz€".encode())


def test_set_cursor_rejects_mid_code_point_offsets() -> None:
    buffer = make_buffer("é")

    with pytest.raises(BufferValidationError):
        buffer.set_cursor(1)
    with pytest.raises(BufferValidationError):
        buffer.set_cursor(5)


def test_on_change_runs_once_per_edit_and_never_for_movement() -> None:
    changes: List[str] = []
    buffer = QueryBuffer(on_change=lambda buf: changes.append(buf.text))

    buffer.insert("ab")
    buffer.move_cursor(-1)
    buffer.move_to_end()
    buffer.backspace()
    buffer.clear()

    assert changes == ["ab", "a", ""]


def test_version_tracks_content_changes() -> None:
    buffer = make_buffer()
    start = buffer.snapshot().version

    buffer.insert("x")
    buffer.move_cursor(-1)

    assert buffer.snapshot().version == start + 1


def test_capacity_must_be_positive() -> None:
    with pytest.raises(ValueError):
        QueryBuffer(capacity=0)


def test_word_left_twice_from_mid_word_reaches_previous_word() -> None:
    buffer = make_buffer("foo bar")
    buffer.set_cursor(6)

    buffer.move_word_edge(-1)
    assert buffer.cursor == 4
    buffer.move_word_edge(-1)
    assert buffer.cursor == 0


def test_cursor_stays_on_code_point_boundaries() -> None:
    buffer = make_buffer("ü €x 😀", delimiters=" ")
    steps = [
        lambda: buffer.move_cursor(-1),
        lambda: buffer.move_word_edge(-1),
        lambda: buffer.insert("é"),
        lambda: buffer.move_cursor(+1),
        lambda: buffer.move_word_edge(+1),
        lambda: buffer.backspace(),
        lambda: buffer.delete_word_left(),
    ]

    for step in steps * 3:
        step()
        assert is_boundary(buffer.state, buffer.cursor)
        buffer.raw.decode("utf-8")


def test_word_left_over_long_word_does_not_rescan_the_query(monkeypatch) -> None:
    scans: List[bytes] = []
    original = query_module.iter_boundaries

    def counting_boundaries(data: bytes):
        scans.append(bytes(data))
        return original(data)

    buffer = make_buffer("é" * 4000 + "x" * 190)
    monkeypatch.setattr(query_module, "iter_boundaries", counting_boundaries)

    assert buffer.move_word_edge(-1)
    assert buffer.cursor == 0
    assert scans == []

    buffer.move_to_end()
    buffer.delete_word_left()
    assert buffer.text == ""
    assert len(scans) <= 1


def test_backspace_after_stray_continuation_byte_lands_on_boundary() -> None:
    buffer = make_buffer(b"a\x80\x80b")

    buffer.backspace()
    assert buffer.raw == b"a\x80\x80"
    buffer.backspace()

    assert buffer.raw == b""
    assert is_boundary(buffer.state, buffer.cursor)
