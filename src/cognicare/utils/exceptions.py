"""Custom exceptions for CogniCare."""

from uuid import UUID


class CognicareError(Exception):
    """Base exception for all CogniCare errors."""

    pass


class ConfigurationError(CognicareError):
    """Error in configuration or settings."""

    pass


class StorageError(CognicareError):
    """Error while reading or writing stored records."""

    pass


class UserNotFoundError(StorageError):
    """Raised when an operation targets a user that has no profile.

    Attributes:
        user_id: The identifier of the user that was not found
    """

    def __init__(self, user_id: UUID | str):
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id

    def __str__(self) -> str:
        return f"UserNotFoundError: {self.args[0]}"
