"""Data models for Merkle inclusion paths."""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

Position = Literal["left", "right"]


class ProofStep(BaseModel):
    """One sibling digest on the path from a leaf to the root."""

    model_config = ConfigDict(frozen=True)

    sibling: bytes = Field(
        ...,
        description="Digest of the sibling node at this level."
    )
    position: Position = Field(
        ...,
        description="Whether the sibling sits to the left or right of the running digest."
    )


class MerkleProof(BaseModel):
    """Inclusion path for one leaf of a hash tree."""

    model_config = ConfigDict(frozen=True)

    leaf_index: int = Field(
        ...,
        ge=0,
        description="Index of the leaf in insertion order."
    )
    tree_size: int = Field(
        ...,
        ge=1,
        description="Number of leaves in the tree the path was taken from."
    )
    leaf_hash: bytes = Field(
        ...,
        description="Digest of the leaf."
    )
    root_hash: bytes = Field(
        ...,
        description="Root digest the path leads to."
    )
    path: List[ProofStep] = Field(
        default_factory=list,
        description="Sibling digests ordered from the leaf level upward."
    )

    def hex_path(self) -> List[str]:
        """Return the path as ``"<position>:<hex digest>"`` strings."""
        return [f"{step.position}:{step.sibling.hex()}" for step in self.path]
