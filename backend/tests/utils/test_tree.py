"""
平铺列表转树测试
"""
from backoffice.utils.tree import transformation_tree


def test_builds_nested_children_sorted_by_order():
    items = [
        {"id": 1, "parent_id": None, "order": 2},
        {"id": 2, "parent_id": None, "order": 1},
        {"id": 3, "parent_id": 1, "order": None},
        {"id": 4, "parent_id": 3, "order": 0},
    ]
    tree = transformation_tree(items)

    assert [node["id"] for node in tree] == [2, 1]
    assert tree[0]["children"] == []
    assert tree[1]["children"][0]["id"] == 3
    assert tree[1]["children"][0]["children"][0]["id"] == 4


def test_orphans_are_dropped():
    items = [{"id": 1, "parent_id": None}, {"id": 2, "parent_id": 99}]
    assert [node["id"] for node in transformation_tree(items)] == [1]


def test_subtree_from_given_parent():
    items = [{"id": 1, "parent_id": None}, {"id": 2, "parent_id": 1}]
    assert [node["id"] for node in transformation_tree(items, 1)] == [2]
