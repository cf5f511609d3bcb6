import itertools
import random

import pytest

from dungeon_bsp.generators.bsp import (
    BSPNode,
    ConnectionState,
    GeneratorSettings,
    PartitionTree,
    SplitAxis,
    SplitPolicy,
    Volume,
)

from conftest import FixedAxisPolicy


@pytest.fixture
def tree(root_cell, settings):
    return PartitionTree.build(root_cell, SplitPolicy(settings), random.Random(11))


def test_leaves_tile_the_root_cell(tree, root_cell, settings):
    policy = SplitPolicy(settings)
    leaves = tree.leaves()

    assert len(leaves) > 1
    assert sum(leaf.cell.volume for leaf in leaves) == pytest.approx(root_cell.volume)
    for leaf in leaves:
        assert policy.is_valid(leaf.cell)
        assert root_cell.contains(leaf.cell)
    for a, b in itertools.combinations(leaves, 2):
        assert not a.cell.overlaps(b.cell)


def test_accepted_splits_halve_the_parent(tree):
    for node in tree.internal_nodes():
        a, b = node.children
        assert node.split_axis in (SplitAxis.X, SplitAxis.Z)
        assert not a.cell.overlaps(b.cell)
        assert a.cell.volume + b.cell.volume == pytest.approx(node.cell.volume)
        assert a.cell.union(b.cell) == node.cell
        assert a.depth == b.depth == node.depth + 1


def test_leaves_have_no_split_axis(tree):
    for leaf in tree.leaves():
        assert leaf.is_leaf
        assert leaf.split_axis is None
        assert leaf.children is None
        assert leaf.state is ConnectionState.LEAF


def test_node_arena_is_indexed_by_id(tree):
    for index, node in enumerate(tree.nodes):
        assert node.node_id == index
        assert tree.node(index) is node
    assert tree.root.node_id == 0


def test_invalid_root_is_never_split(settings):
    sliver = Volume.from_center_size((0.0, 0.0, 0.0), (100.0, 10.0, 5.0))
    tree = PartitionTree.build(sliver, SplitPolicy(settings), random.Random(1))
    assert tree.root.is_leaf
    assert tree.height == 0


def test_max_depth_caps_the_tree(root_cell, settings):
    tree = PartitionTree.build(root_cell, SplitPolicy(settings), random.Random(4), max_depth=2)
    assert tree.height <= 2
    assert len(tree.leaves()) <= 4


def test_traversal_queries():
    cell = Volume.from_center_size((0.0, 0.0, 0.0), (64.0, 10.0, 64.0))
    tree = PartitionTree.build(cell, FixedAxisPolicy(SplitAxis.X), random.Random(0), max_depth=3)

    assert len(tree.leaves()) == 8
    assert [len(tree.nodes_at_depth(d)) for d in range(5)] == [1, 2, 4, 8, 0]
    assert tree.height == 3
    # Leaves come out in pre-order: lowest X first
    xs = [leaf.cell.center[0] for leaf in tree.leaves()]
    assert xs == sorted(xs)
    # Relative depth from an inner node
    left = tree.root.children[0]
    assert left.get_nodes_at_depth(0) == [left]
    assert len(left.get_nodes_at_depth(2)) == 4


def test_connected_flag_flips_once():
    node = BSPNode(0, Volume.from_center_size((0.0, 0.0, 0.0), (10.0, 10.0, 10.0)))
    with pytest.raises(RuntimeError):
        node.mark_connected()

    a, b = node.cell.halve(SplitAxis.X)
    node.attach_children(BSPNode(1, a, 1), BSPNode(2, b, 1), SplitAxis.X)
    assert node.state is ConnectionState.PENDING
    assert not node.is_ready

    node.mark_connected()
    assert node.state is ConnectionState.CONNECTED
    assert node.is_ready
    with pytest.raises(RuntimeError):
        node.mark_connected()


def test_children_attach_once():
    node = BSPNode(0, Volume.from_center_size((0.0, 0.0, 0.0), (10.0, 10.0, 10.0)))
    a, b = node.cell.halve(SplitAxis.Z)
    node.attach_children(BSPNode(1, a, 1), BSPNode(2, b, 1), SplitAxis.Z)
    with pytest.raises(RuntimeError):
        node.attach_children(BSPNode(3, a, 1), BSPNode(4, b, 1), SplitAxis.Z)


def test_same_seed_same_tree(root_cell):
    settings = GeneratorSettings()
    a = PartitionTree.build(root_cell, SplitPolicy(settings), random.Random(77))
    b = PartitionTree.build(root_cell, SplitPolicy(settings), random.Random(77))
    assert [n.cell for n in a.nodes] == [n.cell for n in b.nodes]
    assert [n.split_axis for n in a.nodes] == [n.split_axis for n in b.nodes]
