"""Exceptions raised by the accumulator and hash tree."""


class MerkleError(Exception):
    """Base class for all errors raised by this package."""

    pass


class EmptyInputError(MerkleError, ValueError):
    """Raised when a tree or root is requested from zero leaves."""

    def __init__(self, message: str = "At least one leaf is required"):
        super().__init__(message)
