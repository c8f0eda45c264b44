"""
Hash combination primitive shared by the accumulator and the hash tree.

- LeafHash(data) = H(data), or H(0x00 || data) with domain separation
- NodeHash(left, right) = H(left || right), or H(0x01 || left || right)
"""

import logging
from typing import List, Optional, Sequence

from cryptography.hazmat.primitives import hashes

from merkle_accumulator.core.config import DEFAULT_CONFIG, OddNodePolicy, TreeConfig
from merkle_accumulator.core.errors import EmptyInputError

logger = logging.getLogger(__name__)

# Domain separation tags for Merkle tree hashing
LEAF_NODE_PREFIX = b'\x00'
INTERNAL_NODE_PREFIX = b'\x01'


def _ensure_bytes(data) -> bytes:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"Expected a bytes-like item, got {type(data).__name__}")


class HashCombiner:
    """Computes leaf and internal-node digests for one ``TreeConfig``."""

    def __init__(self, config: Optional[TreeConfig] = None):
        self.config = config or DEFAULT_CONFIG

    @property
    def digest_size(self) -> int:
        return self.config.digest_size

    @property
    def odd_node_policy(self) -> OddNodePolicy:
        return self.config.odd_node_policy

    def _digest(self, *parts: bytes) -> bytes:
        hasher = hashes.Hash(self.config.new_algorithm())
        for part in parts:
            hasher.update(part)
        return hasher.finalize()

    def hash_leaf(self, data: bytes) -> bytes:
        """Hash one input item into a leaf digest."""
        data = _ensure_bytes(data)
        if self.config.domain_separation:
            return self._digest(LEAF_NODE_PREFIX, data)
        return self._digest(data)

    def hash_children(self, left: bytes, right: bytes) -> bytes:
        """Hash the concatenation of two child digests, left first."""
        if self.config.domain_separation:
            return self._digest(INTERNAL_NODE_PREFIX, left, right)
        return self._digest(left, right)

    def reduce_layer(self, layer: Sequence[bytes]) -> List[bytes]:
        """Pair adjacent digests of ``layer`` into the layer above it."""
        parents = [
            self.hash_children(layer[i], layer[i + 1])
            for i in range(0, len(layer) - 1, 2)
        ]
        if len(layer) % 2 == 1:
            last = layer[-1]
            if self.odd_node_policy is OddNodePolicy.DUPLICATE and len(layer) > 1:
                parents.append(self.hash_children(last, last))
            else:
                parents.append(last)
        return parents

    def build_layers(self, leaves: Sequence[bytes]) -> List[List[bytes]]:
        """
        Build every layer from leaf digests up to the root.

        Args:
            leaves: Leaf digests in insertion order.

        Returns:
            ``[layer0, layer1, ..., [root]]``

        Raises:
            EmptyInputError: If ``leaves`` is empty.
        """
        if not leaves:
            raise EmptyInputError("Cannot build layers from zero leaves")

        layers = [list(leaves)]
        while len(layers[-1]) > 1:
            layers.append(self.reduce_layer(layers[-1]))
        return layers
