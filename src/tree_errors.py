class EmptyTreeError(ValueError):
    """Raised when the root of an empty tree is requested."""

    def __init__(self, message: str = "root from empty tree") -> None:
        super().__init__(message)
