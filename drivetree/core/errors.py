from __future__ import annotations


class ExpansionError(RuntimeError):
    """Raised when a directory listing fails; the node stays unexpanded."""

    def __init__(self, path: str, cause: BaseException | None = None) -> None:
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Could not list '{path}'{detail}")
        self.path = path
        self.cause = cause


class RenameError(RuntimeError):
    """Raised when a rename is rejected or fails; the node is left untouched."""

    def __init__(self, message: str, *, kind: str = "failed", path: str = "") -> None:
        super().__init__(message)
        self.kind = kind
        self.path = path


class NodeStateError(RuntimeError):
    """Raised when an operation is called on a node in the wrong state."""


class AddressingError(RuntimeError):
    """Raised when a node cannot be found in its owning sequence."""
