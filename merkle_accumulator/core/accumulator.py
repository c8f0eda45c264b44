"""
Layered digest accumulator with batched commits.

Leaves are hashed on insert and buffered. ``commit`` appends the buffered
leaves to the leaf layer and recomputes every layer above it from the full
leaf set, so the result never depends on how inserts were batched.
"""

import logging
from typing import Iterable, List, Optional

from merkle_accumulator.core.config import TreeConfig
from merkle_accumulator.core.errors import EmptyInputError
from merkle_accumulator.core.hashing import HashCombiner
from merkle_accumulator.core.models import MerkleProof
from merkle_accumulator.core.tree import HashTree

logger = logging.getLogger(__name__)


class LayeredAccumulator:
    """
    Accumulates leaves into a layered Merkle structure.

    ``layers[0]`` holds the committed leaf digests in insertion order and
    ``layers[k]`` holds the parent digests of ``layers[k - 1]``. Leaves
    inserted since the last commit are not part of any layer.
    """

    def __init__(self, config: Optional[TreeConfig] = None):
        self.combiner = HashCombiner(config)
        self._layers: List[List[bytes]] = []
        self._pending: List[bytes] = []

    @property
    def config(self) -> TreeConfig:
        return self.combiner.config

    def insert(self, data: bytes) -> None:
        """Hash ``data`` into a leaf and buffer it until the next commit."""
        self._pending.append(self.combiner.hash_leaf(data))

    def extend(self, items: Iterable[bytes]) -> None:
        for item in items:
            self.insert(item)

    def commit(self) -> Optional[bytes]:
        """
        Fold the pending leaves into the layers.

        Returns:
            The new root digest, or None if nothing has ever been committed.
        """
        pending, self._pending = self._pending, []
        if not pending:
            logger.debug("Commit with no pending leaves; layers unchanged")
            return self._layers[-1][0] if self._layers else None

        leaves = (self._layers[0] if self._layers else []) + pending
        self._layers = self.combiner.build_layers(leaves)

        assert len(self._layers[-1]) == 1, "top layer must hold exactly one digest"
        logger.debug(
            "Committed %d leaves (%d total), height %d, root %s",
            len(pending), len(leaves), len(self._layers), self.root.hex()
        )
        return self.root

    @property
    def root(self) -> bytes:
        """Root digest over every committed leaf."""
        if not self._layers:
            raise EmptyInputError("No leaves have been committed")
        return self._layers[-1][0]

    @property
    def layers(self) -> List[List[bytes]]:
        return [list(layer) for layer in self._layers]

    @property
    def leaves(self) -> List[bytes]:
        return list(self._layers[0]) if self._layers else []

    @property
    def pending_leaves(self) -> List[bytes]:
        return list(self._pending)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def height(self) -> int:
        return len(self._layers)

    def __len__(self) -> int:
        return len(self._layers[0]) if self._layers else 0

    def to_tree(self) -> HashTree:
        """Build a ``HashTree`` over the committed leaves."""
        return HashTree.from_leaf_digests(self.leaves, self.config)

    def proof(self, leaf_index: int) -> MerkleProof:
        """Inclusion path for a committed leaf."""
        return self.to_tree().proof(leaf_index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LayeredAccumulator):
            return NotImplemented
        return self._layers == other._layers

    def __repr__(self) -> str:
        root = self._layers[-1][0].hex() if self._layers else None
        return (
            f"LayeredAccumulator(leaves={len(self)}, pending={self.pending_count}, "
            f"height={self.height}, root={root})"
        )
