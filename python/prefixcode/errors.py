class PrefixCodeError(Exception):
    """Base class for errors raised while building or applying a prefix code."""


class ConstructionError(PrefixCodeError, ValueError):
    """The symbol table cannot be turned into a tree."""


class EncodingError(PrefixCodeError, ValueError):
    """The source data cannot be serialized with the given code table."""

    def __init__(self, message: str, value: int | None = None, position: int | None = None) -> None:
        super().__init__(message)
        self.value = value
        self.position = position


class DegenerateTreeWarning(UserWarning):
    """The tree is a lone leaf, so its only symbol gets an empty code."""
