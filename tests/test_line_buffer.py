import random

import pytest
from scrollterm import LineBuffer, Line, LineOverflow, ReadOnlyLine, BufferFull


def test_new_buffer_has_one_empty_editable_line():
    b = LineBuffer()
    assert len(b.lines) == 1
    assert b.active_index == 0
    assert b.active_line == Line("", editable=True)
    assert b.cursor.offset == 0


def test_insert_at_cursor():
    b = LineBuffer()
    b.insert("hllo")
    b.cursor.offset = 1
    b.insert("e")
    assert b.active_line.text == "hello"
    assert b.cursor.offset == 2


def test_insert_rejected_at_length_limit():
    """Lines hold at most max_line_length - 1 characters."""
    b = LineBuffer(max_line_length=5)
    b.insert("abcd")
    with pytest.raises(LineOverflow):
        b.insert("e")
    assert b.active_line.text == "abcd"
    assert b.cursor.offset == 4


def test_insert_rejected_on_read_only_line():
    b = LineBuffer()
    b.active_line.editable = False
    with pytest.raises(ReadOnlyLine):
        b.insert("x")
    assert b.active_line.text == ""


def test_delete_before_and_at_cursor():
    b = LineBuffer()
    b.insert("abc")
    b.cursor.offset = 2
    assert b.delete_before_cursor()
    assert b.active_line.text == "ac"
    assert b.cursor.offset == 1
    assert b.delete_at_cursor()
    assert b.active_line.text == "a"
    assert b.cursor.offset == 1


def test_delete_is_noop_at_edges():
    b = LineBuffer()
    b.insert("ab")
    assert not b.delete_at_cursor()
    b.cursor.offset = 0
    assert not b.delete_before_cursor()
    assert b.active_line.text == "ab"


def test_commit_freezes_line_and_opens_new_one():
    b = LineBuffer()
    b.insert("ls")
    committed = b.commit_active_line()
    assert committed == "ls"
    assert b.lines[0] == Line("ls", editable=False)
    assert b.active_index == 1
    assert b.active_line == Line("", editable=True)
    assert b.cursor.offset == 0


def test_commit_fails_when_full():
    b = LineBuffer(max_lines=2)
    b.commit_active_line()
    b.insert("x")
    with pytest.raises(BufferFull):
        b.commit_active_line()
    assert len(b.lines) == 2
    assert b.active_line.text == "x"
    assert b.active_line.editable


def test_append_output_fills_empty_active_line():
    b = LineBuffer()
    b.append_output("result")
    assert b.text_lines() == ["result", ""]
    assert not b.lines[0].editable
    assert b.active_line.editable


def test_append_output_keeps_typed_text():
    b = LineBuffer()
    b.insert("typed")
    b.append_output("out")
    assert b.text_lines() == ["typed", "out", ""]


def test_append_output_when_full():
    b = LineBuffer(max_lines=1)
    with pytest.raises(BufferFull):
        b.append_output("out")
    assert b.text_lines() == [""]


def test_clear_resets_to_single_line():
    b = LineBuffer()
    b.insert("a")
    b.commit_active_line()
    b.append_output("b")
    b.clear()
    assert b.lines == [Line()]
    assert b.cursor.offset == 0


def test_soft_wrap_carries_typed_text_and_tail():
    b = LineBuffer()
    b.insert("abcdef")
    b.cursor.offset = 4
    b.soft_wrap("X")
    assert b.text_lines() == ["abcd", "Xef"]
    assert b.lines[0].wrapped
    assert not b.lines[0].editable
    assert b.cursor.offset == 1
    assert b.input_text() == "abcdXef"


def test_soft_wrap_when_full():
    b = LineBuffer(max_lines=1)
    b.insert("abc")
    with pytest.raises(BufferFull):
        b.soft_wrap("d")
    assert b.text_lines() == ["abc"]


def test_soft_wrap_spreads_pieces_over_lines():
    b = LineBuffer()
    b.insert("ab")
    b.soft_wrap("cdefghij", ["cdef", "ghij"])
    assert b.text_lines() == ["ab", "cdef", "ghij"]
    assert [line.wrapped for line in b.lines] == [True, True, False]
    assert [line.editable for line in b.lines] == [False, False, True]
    assert b.cursor.offset == 4
    assert b.input_text() == "abcdefghij"


def test_soft_wrap_without_head_keeps_no_empty_line():
    b = LineBuffer()
    b.soft_wrap("abcdefghij", ["abcd", "efgh", "ij"])
    assert b.text_lines() == ["abcd", "efgh", "ij"]
    assert b.cursor.offset == 2


def test_soft_wrap_pieces_need_room():
    b = LineBuffer(max_lines=2)
    b.insert("ab")
    with pytest.raises(BufferFull):
        b.soft_wrap("cdefgh", ["cdef", "gh"])
    assert b.text_lines() == ["ab"]
    assert b.cursor.offset == 2


def test_commit_returns_whole_input_run():
    b = LineBuffer()
    b.insert("abc")
    b.soft_wrap("d")
    b.insert("e")
    assert b.commit_active_line() == "abcde"
    assert not b.lines[1].wrapped
    assert b.input_text() == ""


def test_join_previous_makes_previous_line_active():
    b = LineBuffer()
    b.append_output("out")
    b.insert("in")
    b.cursor.offset = 0
    assert b.join_previous()
    assert b.text_lines() == ["outin"]
    assert b.active_line.editable
    assert b.cursor.offset == 3


def test_join_previous_respects_length_limit():
    b = LineBuffer(max_line_length=5)
    b.append_output("abc")
    b.insert("de")
    b.cursor.offset = 0
    with pytest.raises(LineOverflow):
        b.join_previous()
    assert b.text_lines() == ["abc", "de"]


def test_replace_input_replaces_wrapped_run_only():
    b = LineBuffer()
    b.append_output("out")
    b.insert("abc")
    b.soft_wrap("d")
    b.replace_input(["xy", "z"])
    assert b.text_lines() == ["out", "xy", "z"]
    assert b.lines[1].wrapped and not b.lines[1].editable
    assert b.active_line.editable
    assert b.cursor.offset == 1


def test_replace_lines_forces_last_line_editable():
    b = LineBuffer()
    b.replace_lines([Line("a", editable=False), Line("b", editable=False)])
    assert b.active_line.editable
    assert b.cursor.offset == 1


def test_replace_lines_over_capacity_leaves_buffer():
    b = LineBuffer(max_lines=2)
    b.insert("keep")
    with pytest.raises(BufferFull):
        b.replace_lines([Line("a"), Line("b"), Line("c")])
    assert b.text_lines() == ["keep"]


def test_invariants_hold_for_random_edits():
    rng = random.Random(1234)
    b = LineBuffer(max_lines=8, max_line_length=12)
    for _ in range(2000):
        op = rng.choice(["insert", "back", "del", "left", "right", "commit", "output", "clear"])
        try:
            if op == "insert":
                b.insert(rng.choice("abc "))
            elif op == "back":
                b.delete_before_cursor()
            elif op == "del":
                b.delete_at_cursor()
            elif op == "left":
                b.cursor.move_left()
            elif op == "right":
                b.cursor.move_right(len(b.active_line.text))
            elif op == "commit":
                b.commit_active_line()
            elif op == "output":
                b.append_output("out")
            elif rng.random() < 0.1:
                b.clear()
        except (LineOverflow, BufferFull):
            pass
        assert 0 <= b.cursor.offset <= len(b.active_line.text)
        assert 0 <= b.active_index < len(b.lines) <= b.max_lines
        assert b.active_line.editable
        assert all(not line.editable for line in b.lines[:-1])
        assert all(len(line.text) < b.max_line_length for line in b.lines)
