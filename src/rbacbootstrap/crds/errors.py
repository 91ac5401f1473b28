"""
Custom exception types for the RBAC bootstrap.
"""
from typing import Optional


class RBACBootstrapException(Exception):
    """Base exception for all rbac bootstrap errors."""
    pass


class KubeConfigError(RBACBootstrapException):
    """Raised when the Kubernetes configuration cannot be loaded."""
    pass


class StorageError(RBACBootstrapException):
    """Raised when the backing object store rejects or fails a request."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class AlreadyExistsError(StorageError):
    """Raised when a create conflicts with an existing object."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status=409)


class ReconcileError(RBACBootstrapException):
    """A catalog reconciliation stage failed.

    The message names the stage; the underlying error is kept as ``__cause__``
    and appended when the error is rendered.
    """

    def __init__(self, stage: str) -> None:
        super().__init__(stage)
        self.stage = stage

    def __str__(self) -> str:
        if self.__cause__ is not None:
            return f"{self.stage}: {self.__cause__}"
        return self.stage


class BootstrapError(RBACBootstrapException):
    """Raised when the default admin user or its binding cannot be ensured.

    Like ReconcileError, the underlying error is appended when rendered.
    """

    def __str__(self) -> str:
        message = super().__str__()
        if self.__cause__ is not None:
            return f"{message}: {self.__cause__}"
        return message
