"""
Binary hash tree built once from a fixed leaf set.

Each internal node owns its two children and stores the hash of their
concatenated digests. The tree is read-only after construction and exists
mainly to extract inclusion paths for individual leaves.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from merkle_accumulator.core.config import OddNodePolicy, TreeConfig
from merkle_accumulator.core.errors import EmptyInputError
from merkle_accumulator.core.hashing import HashCombiner
from merkle_accumulator.core.models import MerkleProof, ProofStep

logger = logging.getLogger(__name__)


@dataclass
class Node:
    """A node in the hash tree."""
    value: bytes
    left: Optional['Node'] = None
    right: Optional['Node'] = None
    leaf_index: Optional[int] = None
    leaf_count: int = 1

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self) -> str:
        kind = "leaf" if self.is_leaf else "branch"
        return f"Node({kind}, value={self.value.hex()[:16]}..., leaves={self.leaf_count})"


class HashTree:
    """
    An immutable binary Merkle tree.

    Usage:
        tree = HashTree.build_from_leaves([b"a", b"b", b"c"])
        root = tree.root_hash
        proof = tree.proof(1)
    """

    def __init__(
        self,
        leaves: Iterable[bytes],
        config: Optional[TreeConfig] = None,
        prehashed: bool = False,
    ):
        """
        Build the tree from ``leaves``.

        Args:
            leaves: Raw items, or leaf digests when ``prehashed`` is true.
            config: Hashing parameters; defaults to SHA-256 with promotion of odd nodes.
            prehashed: Treat ``leaves`` as digests that are already leaf hashes.

        Raises:
            EmptyInputError: If ``leaves`` is empty.
        """
        self.combiner = HashCombiner(config)
        digests = list(leaves) if prehashed else [self.combiner.hash_leaf(leaf) for leaf in leaves]
        if not digests:
            raise EmptyInputError("Cannot build a hash tree from zero leaves")

        self._levels: List[List[Node]] = []
        self.root: Node = self._build_tree(digests)
        logger.debug(
            "Built hash tree: %d leaves, height %d, root %s",
            self.leaf_count, self.height, self.root.value.hex()
        )

    @classmethod
    def build_from_leaves(cls, items: Iterable[bytes], config: Optional[TreeConfig] = None) -> 'HashTree':
        """Hash each item into a leaf and build the tree above them."""
        return cls(items, config)

    @classmethod
    def from_leaf_digests(cls, digests: Iterable[bytes], config: Optional[TreeConfig] = None) -> 'HashTree':
        """Build the tree from leaf digests that were hashed elsewhere."""
        return cls(digests, config, prehashed=True)

    def _build_tree(self, digests: List[bytes]) -> Node:
        nodes = [Node(value=digest, leaf_index=i) for i, digest in enumerate(digests)]
        self._levels.append(nodes)

        while len(nodes) > 1:
            new_level = []
            for i in range(0, len(nodes) - 1, 2):
                new_level.append(self._branch(nodes[i], nodes[i + 1]))

            if len(nodes) % 2 == 1:
                last = nodes[-1]
                if self.combiner.odd_node_policy is OddNodePolicy.DUPLICATE:
                    # The copy keeps ownership strict: no node has two parents
                    twin = self._branch(last, copy.deepcopy(last))
                    twin.leaf_count = last.leaf_count
                    new_level.append(twin)
                else:
                    new_level.append(last)

            self._levels.append(new_level)
            nodes = new_level

        return nodes[0]

    def _branch(self, left: Node, right: Node) -> Node:
        return Node(
            value=self.combiner.hash_children(left.value, right.value),
            left=left,
            right=right,
            leaf_count=left.leaf_count + right.leaf_count,
        )

    @property
    def root_hash(self) -> bytes:
        return self.root.value

    @property
    def leaf_count(self) -> int:
        return len(self._levels[0])

    @property
    def height(self) -> int:
        """Number of layers, counting the leaf layer and the root."""
        return len(self._levels)

    @property
    def leaf_hashes(self) -> List[bytes]:
        return [node.value for node in self._levels[0]]

    def __len__(self) -> int:
        return self.leaf_count

    def get_leaf(self, index: int) -> Node:
        if index < 0 or index >= self.leaf_count:
            raise IndexError(f"Leaf index {index} out of range for {self.leaf_count} leaves")
        return self._levels[0][index]

    def layers(self) -> List[List[bytes]]:
        """Return the digests of every layer, leaves first and root last."""
        return [[node.value for node in level] for level in self._levels]

    def proof(self, leaf_index: int) -> MerkleProof:
        """
        Extract the inclusion path for a leaf.

        Args:
            leaf_index: Index of the leaf in insertion order.

        Returns:
            A ``MerkleProof`` whose path lists sibling digests from the leaf
            level up to just below the root.

        Raises:
            IndexError: If ``leaf_index`` is outside the tree.
        """
        leaf = self.get_leaf(leaf_index)

        steps: List[ProofStep] = []
        node = self.root
        remaining = leaf_index
        while not node.is_leaf:
            if remaining < node.left.leaf_count:
                steps.append(ProofStep(sibling=node.right.value, position="right"))
                node = node.left
            else:
                steps.append(ProofStep(sibling=node.left.value, position="left"))
                remaining -= node.left.leaf_count
                node = node.right

        assert node.leaf_index == leaf_index, "descent reached the wrong leaf"
        steps.reverse()

        return MerkleProof(
            leaf_index=leaf_index,
            tree_size=self.leaf_count,
            leaf_hash=leaf.value,
            root_hash=self.root_hash,
            path=steps,
        )

    def __repr__(self) -> str:
        return f"HashTree(leaves={self.leaf_count}, root={self.root_hash.hex()})"
