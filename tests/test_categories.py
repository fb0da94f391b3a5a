import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
import pytest
from pricing.categories import CategoryTree, flatten_categories
from pricing.domain import Category
from pricing.errors import InvalidArgument


@pytest.fixture
def shoes_tree():
    tree = CategoryTree()
    tree.add("shoes", "shoes")
    tree.add("casual", "casual")
    tree.add("nike", "nike")
    return tree


def test_assign_parent_sets_parent(shoes_tree):
    updated = shoes_tree.assign_parent("nike", "shoes")
    assert updated.parent_id == "shoes"
    assert shoes_tree.get("nike").get_or_else(None).parent_id == "shoes"


def test_assign_parent_self_raises(shoes_tree):
    with pytest.raises(InvalidArgument):
        shoes_tree.assign_parent("nike", "nike")


def test_assign_parent_none_raises(shoes_tree):
    with pytest.raises(InvalidArgument):
        shoes_tree.assign_parent("nike", None)


def test_assign_parent_unknown_raises(shoes_tree):
    with pytest.raises(InvalidArgument):
        shoes_tree.assign_parent("nike", "boots")


def test_assign_parent_rejects_cycle(shoes_tree):
    """Родителем нельзя назначить собственного потомка"""
    shoes_tree.assign_parent("nike", "casual")
    shoes_tree.assign_parent("casual", "shoes")
    with pytest.raises(InvalidArgument):
        shoes_tree.assign_parent("shoes", "nike")
    # состояние не изменилось
    assert shoes_tree.get("shoes").get_or_else(None).parent_id is None


def test_is_ancestor_of_direct_and_multi_level(shoes_tree):
    shoes_tree.assign_parent("nike", "casual")
    shoes_tree.assign_parent("casual", "shoes")
    assert shoes_tree.is_ancestor_of("casual", "nike")
    assert shoes_tree.is_ancestor_of("shoes", "nike")


def test_is_ancestor_of_reversed_is_false(shoes_tree):
    shoes_tree.assign_parent("nike", "shoes")
    assert not shoes_tree.is_ancestor_of("nike", "shoes")
    assert not shoes_tree.is_ancestor_of("nike", "nike")


def test_covers_includes_same_category(shoes_tree):
    shoes_tree.assign_parent("nike", "shoes")
    assert shoes_tree.covers("nike", "nike")
    assert shoes_tree.covers("shoes", "nike")
    assert not shoes_tree.covers("casual", "nike")


def test_duplicate_id_raises(shoes_tree):
    with pytest.raises(InvalidArgument):
        shoes_tree.add("again", "nike")


def test_tree_from_records_resolves_forward_parents():
    tree = CategoryTree(
        (
            Category(id="c3", title="Leaf", parent_id="c2"),
            Category(id="c2", title="Sub", parent_id="c1"),
            Category(id="c1", title="Root"),
        )
    )
    assert tree.is_ancestor_of("c1", "c3")
    assert tree.title_of("c2") == "Sub"


def test_subtree_nested():
    cats = (
        Category(id="c001", title="Root"),
        Category(id="c002", title="Sub1", parent_id="c001"),
        Category(id="c003", title="Sub2", parent_id="c002"),
        Category(id="c004", title="Other"),
    )
    tree = CategoryTree(cats)
    assert {c.id for c in tree.subtree("c001")} == {"c001", "c002", "c003"}
    assert flatten_categories(cats, "missing") == ()
