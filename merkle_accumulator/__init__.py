"""
Merkle Accumulator - layered hash commitments and binary proof trees.

This package commits sequences of byte items to compact hash digests, either
incrementally through batched commits or all at once as a navigable binary
tree from which inclusion paths can be extracted.
"""

from importlib.metadata import PackageNotFoundError, version

# Set up version
__version__ = "0.1.0"

try:
    __version__ = version("merkle-accumulator")
except PackageNotFoundError:
    pass

from merkle_accumulator.core import (
    EmptyInputError,
    HashCombiner,
    HashTree,
    LayeredAccumulator,
    MerkleError,
    MerkleProof,
    Node,
    OddNodePolicy,
    ProofStep,
    TreeConfig,
)

__all__ = [
    # Structures
    "LayeredAccumulator",
    "HashTree",
    "Node",
    "HashCombiner",
    # Configuration
    "TreeConfig",
    "OddNodePolicy",
    # Models
    "MerkleProof",
    "ProofStep",
    # Errors
    "MerkleError",
    "EmptyInputError",
]
