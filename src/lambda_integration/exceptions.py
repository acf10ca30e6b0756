"""
Errors raised by the Lambda Integration system.
"""
from typing import Optional


class LambdaIntegrationError(Exception):
    """Base class for every error raised while packaging or deploying a function."""


class PackagingError(LambdaIntegrationError):
    """The package could not be built from the filesystem."""


class RemoteError(LambdaIntegrationError):
    """
    An error reported by AWS.

    Keeps the error code AWS classified the failure with, when there is one.
    """

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.error_code = error_code


class ProbeError(RemoteError):
    """Checking whether the function exists failed for a reason other than "not found"."""


class RoleResolutionError(RemoteError):
    """The execution role could not be resolved to an ARN."""


class RemoteOperationError(RemoteError):
    """A create, update or publish request was rejected by AWS Lambda."""

    def __init__(self, operation: str, message: str, error_code: Optional[str] = None):
        super().__init__(f"{operation} failed: {message}", error_code=error_code)
        self.operation = operation
