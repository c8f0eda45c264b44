"""
Configuration shared by the layered accumulator and the hash tree.

Both structures take the same ``TreeConfig`` so that, for a given leaf
sequence, they agree on every digest they produce.
"""

from enum import Enum
from typing import Callable, Dict, Literal

from cryptography.hazmat.primitives import hashes
from pydantic import BaseModel, ConfigDict, Field

HashAlgorithmName = Literal[
    "sha256",
    "sha384",
    "sha512",
    "sha3_256",
    "sha3_512",
    "blake2b",
    "blake2s",
]

_ALGORITHMS: Dict[str, Callable[[], hashes.HashAlgorithm]] = {
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
    "sha3_256": hashes.SHA3_256,
    "sha3_512": hashes.SHA3_512,
    # BLAKE2 in cryptography only supports the full digest length
    "blake2b": lambda: hashes.BLAKE2b(64),
    "blake2s": lambda: hashes.BLAKE2s(32),
}


class OddNodePolicy(str, Enum):
    """How the last node of an odd-sized layer reaches the next layer."""
    PROMOTE = "promote"
    DUPLICATE = "duplicate"


class TreeConfig(BaseModel):
    """Hashing parameters fixed for the lifetime of one tree or accumulator."""

    model_config = ConfigDict(frozen=True)

    hash_algorithm: HashAlgorithmName = Field(
        "sha256",
        description="Name of the hash function used for leaves and internal nodes."
    )
    odd_node_policy: OddNodePolicy = Field(
        OddNodePolicy.PROMOTE,
        description="Carry the unpaired node upward unchanged, or pair it with a copy of itself."
    )
    domain_separation: bool = Field(
        False,
        description="Prefix leaves with 0x00 and internal nodes with 0x01 before hashing."
    )

    def new_algorithm(self) -> hashes.HashAlgorithm:
        """Return a fresh ``cryptography`` hash algorithm instance."""
        return _ALGORITHMS[self.hash_algorithm]()

    @property
    def digest_size(self) -> int:
        return self.new_algorithm().digest_size


DEFAULT_CONFIG = TreeConfig()
