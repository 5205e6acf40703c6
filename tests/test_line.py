"""Tests for grapheme-indexed Line operations."""

import grapheme
import pytest

from hecto.line import Line

FLAG = "\U0001F1EB\U0001F1F7"  # Regional indicators F + R: one grapheme
E_ACUTE = "e\u0301"  # 'e' followed by a combining acute accent
FAMILY = "\U0001F468\u200d\U0001F469\u200d\U0001F467"  # ZWJ sequence

SAMPLES = ["", "abc", f"a{FLAG}b", f"caf{E_ACUTE}", f"{FAMILY}x{E_ACUTE}{FLAG}"]


def test_length_counts_graphemes_not_code_points():
    assert Line("abc").length() == 3
    assert Line(FLAG).length() == 1
    assert Line(f"caf{E_ACUTE}").length() == 4
    assert len(Line(FAMILY)) == 1
    assert Line().length() == 0
    assert Line().is_empty()


def test_as_bytes_is_utf8():
    line = Line(f"caf{E_ACUTE}")
    assert line.as_bytes() == f"caf{E_ACUTE}".encode("utf-8")


def test_render_full_line_keeps_clusters_intact():
    text = f"a{FLAG}{E_ACUTE}{FAMILY}"
    line = Line(text)
    assert line.render(0, line.length()) == text


def test_render_sub_range():
    line = Line(f"a{FLAG}b{E_ACUTE}c")
    assert line.render(1, 2) == FLAG
    assert line.render(3, 4) == E_ACUTE
    assert line.render(1, 4) == f"{FLAG}b{E_ACUTE}"


def test_render_clamps_out_of_range():
    line = Line("hello")
    assert line.render(0, 100) == "hello"
    assert line.render(3, 100) == "lo"
    assert line.render(10, 20) == ""
    assert line.render(4, 2) == ""


def test_insert_in_middle():
    line = Line("hllo")
    line.insert(1, "e")
    assert line.content == "hello"
    assert line.length() == 5


def test_insert_past_end_appends():
    line = Line("ab")
    line.insert(99, "c")
    assert line.content == "abc"
    assert line.length() == 3


def test_negative_indices_clamp_to_start():
    line = Line("abc")
    line.insert(-1, "X")
    assert line.content == "Xabc"
    assert line.render(-2, 2) == "Xa"
    line.delete(-1)
    assert line.content == "Xabc"


def test_insert_next_to_flag_does_not_split_it():
    line = Line(f"a{FLAG}b")
    line.insert(2, "x")
    assert line.content == f"a{FLAG}xb"
    assert line.length() == 4


def test_insert_combining_mark_joins_previous_cluster():
    line = Line("cafe")
    line.insert(4, "\u0301")
    assert line.content == f"caf{E_ACUTE}"
    assert line.length() == 4


def test_delete_removes_whole_cluster():
    line = Line(f"a{FLAG}b")
    line.delete(1)
    assert line.content == "ab"
    assert line.length() == 2

    line = Line(f"caf{E_ACUTE}!")
    line.delete(3)
    assert line.content == "caf!"


def test_delete_past_end_is_noop():
    line = Line("abc")
    line.delete(3)
    line.delete(50)
    assert line.content == "abc"
    assert line.length() == 3


def test_split_returns_tail_and_truncates_self():
    line = Line(f"ab{FLAG}cd")
    tail = line.split(2)
    assert line.content == "ab"
    assert line.length() == 2
    assert tail.content == f"{FLAG}cd"
    assert tail.length() == 3


def test_split_at_ends():
    line = Line("abc")
    tail = line.split(0)
    assert line.content == ""
    assert tail.content == "abc"

    line = Line("abc")
    tail = line.split(3)
    assert line.content == "abc"
    assert tail.is_empty()

    line = Line("abc")
    tail = line.split(10)
    assert line.content == "abc"
    assert tail.is_empty()


def test_append_concatenates_and_refreshes_length():
    line = Line("ab")
    line.append(Line(f"{FLAG}c"))
    assert line.content == f"ab{FLAG}c"
    assert line.length() == 4


@pytest.mark.parametrize("text", SAMPLES)
def test_insert_then_delete_at_same_index_restores_content(text):
    for i in range(grapheme.length(text) + 1):
        line = Line(text)
        line.insert(i, "Z")
        line.delete(i)
        assert line.content == text
        assert line.length() == grapheme.length(text)


@pytest.mark.parametrize("text", SAMPLES)
def test_split_then_append_reproduces_content(text):
    for k in range(grapheme.length(text) + 1):
        head = Line(text)
        tail = head.split(k)
        head.append(tail)
        assert head.content == text
        assert head.length() == grapheme.length(text)


def test_length_never_stale_after_mutations():
    line = Line(f"x{FLAG}")
    line.insert(0, E_ACUTE)
    assert line.length() == grapheme.length(line.content)
    line.delete(1)
    assert line.length() == grapheme.length(line.content)
    tail = line.split(1)
    assert line.length() == grapheme.length(line.content)
    assert tail.length() == grapheme.length(tail.content)
    line.append(Line(FAMILY))
    assert line.length() == grapheme.length(line.content)


def test_equality_by_content():
    assert Line("abc") == Line("abc")
    assert Line("abc") != Line("abd")
    assert str(Line("abc")) == "abc"
