from __future__ import annotations


class DisposedDataSourceError(RuntimeError):
    """Raised when a data source is used after destroy()."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot call {operation}() on a destroyed data source.")
