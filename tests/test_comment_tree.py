# tests/test_comment_tree.py
from streamhub.comments.service import build_tree


def _c(id, parent_id=None, content=""):
    return {"id": id, "parent_id": parent_id, "content": content or f"c{id}"}


def test_depth_three_nesting_is_preserved():
    tree = build_tree([_c(1), _c(2, parent_id=1), _c(3, parent_id=2)])

    assert len(tree) == 1
    root = tree[0]
    assert root["id"] == 1
    assert [r["id"] for r in root["replies"]] == [2]
    assert [r["id"] for r in root["replies"][0]["replies"]] == [3]
    assert root["replies"][0]["replies"][0]["replies"] == []


def test_reply_with_missing_parent_is_dropped():
    tree = build_tree([_c(1), _c(2, parent_id=999)])

    assert [n["id"] for n in tree] == [1]
    assert tree[0]["replies"] == []


def test_subtree_of_orphan_is_dropped_too():
    tree = build_tree([_c(1), _c(2, parent_id=50), _c(3, parent_id=2)])
    assert [n["id"] for n in tree] == [1]


def test_roots_and_replies_keep_input_order():
    tree = build_tree([
        _c(1),
        _c(2),
        _c(3, parent_id=1),
        _c(4, parent_id=2),
        _c(5, parent_id=1),
    ])

    assert [n["id"] for n in tree] == [1, 2]
    assert [r["id"] for r in tree[0]["replies"]] == [3, 5]
    assert [r["id"] for r in tree[1]["replies"]] == [4]


def test_input_dicts_are_not_mutated():
    raw = [_c(1), _c(2, parent_id=1)]
    build_tree(raw)
    assert "replies" not in raw[0]


def test_empty_input():
    assert build_tree([]) == []
