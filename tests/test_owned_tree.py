import weakref

import pytest

from linkcell import config as lc_config
from linkcell.errors import IndexOutOfRangeError, OwnerGoneError, OwnershipError
from linkcell.tree import UNOWNED, Branch, Leaf, Tree, add_branch, add_leaf, describe_location


def test_unowned_nodes_report_placeholder_path():
    assert Branch().location() == f"{UNOWNED}.branch"
    assert Leaf("l1").location() == f"{UNOWNED}.l1"
    assert Branch().tree() is None


def test_attached_nodes_report_dotted_path():
    tree = Tree("t1")
    branch = add_branch(tree, Branch("b1"))
    leaf = add_leaf(branch, Leaf("l1"))

    assert branch.location() == "t1.b1"
    assert leaf.location() == "t1.b1.l1"
    assert branch.tree() is tree
    assert leaf.branch() is branch
    assert tree.branches == (branch,)
    assert branch.leaves == (leaf,)
    assert len(tree) == 1 and len(branch) == 1


def test_leaf_of_unowned_branch_inherits_placeholder():
    branch = Branch("b1")
    leaf = branch.add_leaf(Leaf("l1"))

    assert leaf.location() == f"{UNOWNED}.b1.l1"


def test_location_after_tree_destroyed_raises_owner_gone():
    tree = Tree("t1")
    branch = tree.add_branch(Branch("b1"))
    leaf = branch.add_leaf(Leaf("l1"))

    del tree

    with pytest.raises(OwnerGoneError, match="branch 'b1'"):
        branch.location()
    with pytest.raises(OwnerGoneError):
        leaf.location()
    assert not branch.is_attached
    assert leaf.is_attached


def test_leaf_outliving_its_branch():
    branch = Branch("b1")
    leaf = branch.add_leaf(Leaf("l1"))

    del branch

    with pytest.raises(OwnerGoneError):
        leaf.branch()
    with pytest.raises(OwnerGoneError, match="leaf 'l1'"):
        leaf.location()


def test_back_references_do_not_keep_owners_alive():
    tree = Tree()
    probe = weakref.ref(tree)
    branch = tree.add_branch(Branch())
    branch_probe = weakref.ref(branch)
    branch.add_leaf(Leaf())

    del tree
    assert probe() is None
    del branch
    assert branch_probe() is None


def test_attaching_an_owned_branch_elsewhere_is_rejected():
    first, second = Tree("a"), Tree("b")
    branch = first.add_branch(Branch("x"))

    with pytest.raises(OwnershipError):
        second.add_branch(branch)

    assert second.branches == ()
    assert branch.location() == "a.x"


def test_orphan_can_be_reattached_after_owner_is_gone():
    first = Tree("a")
    branch = first.add_branch(Branch("x"))
    del first

    second = Tree("c")
    second.add_branch(branch)

    assert branch.location() == "c.x"


def test_remove_by_index_detaches_child():
    tree = Tree("t")
    first = tree.add_branch(Branch("b1"))
    second = tree.add_branch(Branch("b2"))

    removed = tree.remove_branch(0)

    assert removed is first
    assert first.location() == f"{UNOWNED}.b1"
    assert tree.branches == (second,)
    assert tree.remove_branch(-1) is second
    assert tree.branches == ()


def test_remove_out_of_range_is_a_distinct_recoverable_error():
    branch = Branch("b")
    leaf = branch.add_leaf(Leaf("l"))

    with pytest.raises(IndexOutOfRangeError) as excinfo:
        branch.remove_leaf(3)

    assert isinstance(excinfo.value, IndexError)
    assert excinfo.value.index == 3
    assert excinfo.value.length == 1
    assert branch.leaves == (leaf,)
    assert leaf.location() == "<unowned>.b.l"


def test_describe_location_policies():
    tree = Tree("t")
    branch = tree.add_branch(Branch("b"))
    assert describe_location(branch, policy="recover") == "t.b"

    del tree

    assert describe_location(branch, policy="recover") is None
    with pytest.raises(OwnerGoneError):
        describe_location(branch, policy="fatal")
    with pytest.raises(ValueError):
        describe_location(branch, policy="ignore")


def test_describe_location_defaults_to_runtime_policy(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("LINKCELL_OWNER_POLICY", "fatal")
    lc_config.reset_runtime_config_cache()
    tree = Tree("t")
    branch = tree.add_branch(Branch("b"))
    del tree

    with pytest.raises(OwnerGoneError):
        describe_location(branch)
