# src/seo_auditor/exceptions.py


class InputError(ValueError):
    """Raised when a required input (e.g. the HTML source) is absent."""
    pass


class NotReadyError(RuntimeError):
    """Raised when rules are evaluated before any HTML source was loaded."""
    pass


class IndexOutOfRangeError(IndexError):
    """Raised when a requested rule index does not exist in the catalog."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"Rule index {index} is out of range (catalog size: {size}).")
