"""Tests for group_unresolved_comments."""

from conftest import make_comment
from prconflict.models import LineThread, ThreadKey
from prconflict.services.aggregator import group_unresolved_comments


def test_keeps_only_anchored_unresolved_comments() -> None:
    comments = [
        make_comment(5, path="a.go", line=3),
        make_comment(6, path="a.go", line=3),
        make_comment(9, path=None, line=None),
    ]
    result = group_unresolved_comments({5, 9}, comments)

    assert list(result) == ["a.go"]
    assert list(result["a.go"]) == [3]
    assert [c.id for c in result["a.go"][3].comments] == [5]


def test_comment_missing_only_line_or_path_is_dropped() -> None:
    comments = [
        make_comment(1, path="a.py", line=None),
        make_comment(2, path=None, line=4),
    ]
    assert group_unresolved_comments({1, 2}, comments) == {}


def test_groups_by_file_and_line() -> None:
    comments = [
        make_comment(1, path="a.py", line=2),
        make_comment(2, path="b.py", line=2),
        make_comment(3, path="a.py", line=7),
        make_comment(4, path="a.py", line=2, minutes=5),
    ]
    result = group_unresolved_comments({1, 2, 3, 4}, comments)

    assert sorted(result) == ["a.py", "b.py"]
    assert sorted(result["a.py"]) == [2, 7]
    thread = result["a.py"][2]
    assert isinstance(thread, LineThread)
    assert thread.key == ThreadKey("a.py", 2)
    assert [c.id for c in thread.comments] == [1, 4]
    assert [c.id for c in result["b.py"][2].comments] == [2]


def test_orders_thread_by_creation_time() -> None:
    comments = [
        make_comment(2, minutes=2),
        make_comment(1, minutes=1),
        make_comment(3, minutes=3),
    ]
    thread = group_unresolved_comments({1, 2, 3}, comments)["a.py"][1]
    assert [c.id for c in thread.comments] == [1, 2, 3]


def test_equal_timestamps_keep_input_order() -> None:
    comments = [make_comment(30), make_comment(10), make_comment(20)]
    thread = group_unresolved_comments({10, 20, 30}, comments)["a.py"][1]
    assert [c.id for c in thread.comments] == [30, 10, 20]


def test_unresolved_but_all_outdated_yields_empty() -> None:
    comments = [make_comment(1, path=None, line=None), make_comment(2, path=None, line=None)]
    assert group_unresolved_comments({1, 2}, comments) == {}


def test_every_thread_comment_is_unresolved() -> None:
    comments = [make_comment(i, line=i % 3 + 1) for i in range(1, 20)]
    unresolved_ids = {2, 3, 5, 7, 11, 13, 17, 19}
    result = group_unresolved_comments(unresolved_ids, comments)
    seen = [c.id for lines in result.values() for t in lines.values() for c in t.comments]
    assert sorted(seen) == sorted(unresolved_ids)
    assert all(t.comments for lines in result.values() for t in lines.values())
