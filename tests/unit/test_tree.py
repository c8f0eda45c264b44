"""Unit tests for the binary hash tree."""

import hashlib

import pytest

from merkle_accumulator.core.config import TreeConfig
from merkle_accumulator.core.errors import EmptyInputError
from merkle_accumulator.core.hashing import HashCombiner
from merkle_accumulator.core.models import MerkleProof
from merkle_accumulator.core.tree import HashTree

ITEMS = [bytes([1, 2, 3]), bytes([4, 5, 6]), bytes([7, 8, 9]), bytes([10, 11, 12])]


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def root_from_proof(proof: MerkleProof, combiner: HashCombiner) -> bytes:
    """Fold a leaf digest with its path back up to a root."""
    digest = proof.leaf_hash
    for step in proof.path:
        if step.position == "left":
            digest = combiner.hash_children(step.sibling, digest)
        else:
            digest = combiner.hash_children(digest, step.sibling)
    return digest


def test_single_leaf_root_is_leaf_hash() -> None:
    tree = HashTree.build_from_leaves([b"only"])

    assert tree.root_hash == sha256(b"only")
    assert tree.root.is_leaf
    assert tree.layers() == [[sha256(b"only")]]
    assert tree.proof(0).path == []


def test_empty_input_is_rejected() -> None:
    with pytest.raises(EmptyInputError):
        HashTree.build_from_leaves([])
    with pytest.raises(EmptyInputError):
        HashTree.from_leaf_digests([])


def test_two_leaves() -> None:
    tree = HashTree.build_from_leaves(ITEMS[:2])

    assert tree.root_hash == sha256(sha256(ITEMS[0]) + sha256(ITEMS[1]))
    assert not tree.root.is_leaf
    assert tree.root.left.value == sha256(ITEMS[0])
    assert tree.root.right.value == sha256(ITEMS[1])


def test_three_leaves_promote_last_node() -> None:
    tree = HashTree.build_from_leaves(ITEMS[:3])
    a, b, c = (sha256(item) for item in ITEMS[:3])

    assert tree.root_hash == sha256(sha256(a + b) + c)
    assert tree.root.right.is_leaf
    assert tree.root.right.leaf_index == 2
    assert tree.root.leaf_count == 3


def test_three_leaves_duplicate_last_node() -> None:
    tree = HashTree.build_from_leaves(ITEMS[:3], TreeConfig(odd_node_policy="duplicate"))
    a, b, c = (sha256(item) for item in ITEMS[:3])

    assert tree.root_hash == sha256(sha256(a + b) + sha256(c + c))
    assert tree.root.leaf_count == 3
    # the duplicate is a separate object, not a second reference
    twin = tree.root.right
    assert twin.left is not twin.right
    assert twin.left.value == twin.right.value


def test_deterministic() -> None:
    assert HashTree.build_from_leaves(ITEMS).root_hash == HashTree.build_from_leaves(ITEMS).root_hash


@pytest.mark.parametrize("count", [2, 3, 5, 8])
def test_order_sensitive(count) -> None:
    items = [bytes([i]) * 4 for i in range(count)]
    forward = HashTree.build_from_leaves(items)
    backward = HashTree.build_from_leaves(list(reversed(items)))

    assert forward.root_hash != backward.root_hash


def test_internal_nodes_hash_their_children() -> None:
    tree = HashTree.build_from_leaves([bytes([i]) for i in range(7)])

    stack = [tree.root]
    while stack:
        node = stack.pop()
        if node.is_leaf:
            continue
        assert node.value == sha256(node.left.value + node.right.value)
        stack.extend([node.left, node.right])


def test_layers_match_combiner() -> None:
    combiner = HashCombiner()
    tree = HashTree.build_from_leaves([bytes([i]) for i in range(6)])

    assert tree.layers() == combiner.build_layers(tree.leaf_hashes)
    assert tree.height == 4
    assert len(tree) == 6


def test_from_leaf_digests_matches_build() -> None:
    digests = [sha256(item) for item in ITEMS]

    assert HashTree.from_leaf_digests(digests).root_hash == HashTree.build_from_leaves(ITEMS).root_hash


@pytest.mark.parametrize("policy", ["promote", "duplicate"])
@pytest.mark.parametrize("count", [1, 2, 3, 4, 5, 7, 9, 16])
def test_every_proof_recomputes_root(policy, count) -> None:
    config = TreeConfig(odd_node_policy=policy)
    tree = HashTree.build_from_leaves([f"item-{i}".encode() for i in range(count)], config)

    for index in range(count):
        proof = tree.proof(index)
        assert proof.leaf_index == index
        assert proof.tree_size == count
        assert proof.leaf_hash == tree.get_leaf(index).value
        assert proof.root_hash == tree.root_hash
        assert root_from_proof(proof, tree.combiner) == tree.root_hash


def test_proof_positions() -> None:
    tree = HashTree.build_from_leaves(ITEMS)
    a, b, c, d = (sha256(item) for item in ITEMS)

    proof = tree.proof(2)

    assert [(step.sibling, step.position) for step in proof.path] == [
        (d, "right"),
        (sha256(a + b), "left"),
    ]
    assert proof.hex_path() == [f"right:{d.hex()}", f"left:{sha256(a + b).hex()}"]


def test_promoted_node_has_shorter_path() -> None:
    tree = HashTree.build_from_leaves(ITEMS[:3])

    assert len(tree.proof(0).path) == 2
    assert len(tree.proof(2).path) == 1


def test_proof_with_domain_separation() -> None:
    config = TreeConfig(domain_separation=True, hash_algorithm="sha3_256")
    tree = HashTree.build_from_leaves(ITEMS, config)

    for index in range(len(ITEMS)):
        assert root_from_proof(tree.proof(index), tree.combiner) == tree.root_hash


@pytest.mark.parametrize("index", [-1, 4, 100])
def test_proof_index_out_of_range(index) -> None:
    tree = HashTree.build_from_leaves(ITEMS)
    with pytest.raises(IndexError):
        tree.proof(index)


def test_tampered_leaf_changes_root() -> None:
    tampered = list(ITEMS)
    tampered[1] = bytes([4, 5, 7])

    assert HashTree.build_from_leaves(tampered).root_hash != HashTree.build_from_leaves(ITEMS).root_hash
