"""Tests for line diffs."""

from fluentmatch.diff import DiffLine, DiffOp, diff_lines, unified_diff


# --- diff_lines ---


def test_identical_strings_have_only_context():
    lines = diff_lines("a\nb\nc", "a\nb\nc")
    assert all(line.op is DiffOp.CONTEXT for line in lines)
    assert [line.text for line in lines] == ["a", "b", "c"]


def test_changed_line_is_removed_then_added():
    lines = diff_lines("a\nb\nc\n", "a\nb\nd\n")
    assert DiffLine(DiffOp.REMOVE, "c") in lines
    assert DiffLine(DiffOp.ADD, "d") in lines
    assert lines.index(DiffLine(DiffOp.REMOVE, "c")) < lines.index(DiffLine(DiffOp.ADD, "d"))


def test_render_prefixes():
    assert DiffLine(DiffOp.ADD, "x").render() == "+x"
    assert DiffLine(DiffOp.REMOVE, "x").render() == "-x"
    assert DiffLine(DiffOp.CONTEXT, "x").render() == "x"


# --- unified_diff ---


def test_unified_diff_of_identical_strings_is_empty():
    assert unified_diff("same\ntext\n", "same\ntext\n") == ""


def test_unified_diff_contains_removed_and_added_lines():
    text = unified_diff("a\nb\nc\n", "a\nb\nd\n")
    lines = text.split("\n")
    assert lines[0] == "--- Expected"
    assert lines[1] == "+++ Actual"
    assert lines[2].startswith("@@ ")
    assert "-c" in lines
    assert "+d" in lines
    # context lines are not prefixed
    assert "a" in lines
    assert "b" in lines


def test_unified_diff_hunk_header():
    text = unified_diff("a\nb\nc", "a\nx\nc", context=0)
    assert "@@ -2 +2 @@" in text.split("\n")


def test_unified_diff_limits_context():
    expected = "\n".join(str(n) for n in range(20))
    actual = expected.replace("10", "ten")
    lines = unified_diff(expected, actual, context=1).split("\n")
    assert lines[2:] == ["@@ -10,3 +10,3 @@", "9", "-10", "+ten", "11"]


def test_unified_diff_separate_hunks():
    expected = "\n".join(str(n) for n in range(30))
    actual = expected.replace("2\n", "two\n", 1).replace("25", "twenty-five")
    text = unified_diff(expected, actual, context=2)
    assert sum(1 for line in text.split("\n") if line.startswith("@@")) == 2


def test_unified_diff_pure_insertion():
    text = unified_diff("a\nc", "a\nb\nc", context=0)
    assert text.split("\n")[2:] == ["@@ -1,0 +2 @@", "+b"]
