"""
Core functionality for the Merkle accumulator.

This package contains the hash combination primitive, the layered accumulator,
the binary hash tree and the inclusion path models.
"""

from .accumulator import LayeredAccumulator
from .config import OddNodePolicy, TreeConfig
from .errors import EmptyInputError, MerkleError
from .hashing import HashCombiner
from .models import MerkleProof, ProofStep
from .tree import HashTree, Node

__all__ = [
    'LayeredAccumulator',
    'HashTree',
    'Node',
    'HashCombiner',
    'TreeConfig',
    'OddNodePolicy',
    'MerkleProof',
    'ProofStep',
    'MerkleError',
    'EmptyInputError',
]
