"""Utility modules for CogniCare."""

from cognicare.utils.exceptions import (
    CognicareError,
    ConfigurationError,
    StorageError,
    UserNotFoundError,
)
from cognicare.utils.numbers import round_half_up

__all__ = [
    "CognicareError",
    "ConfigurationError",
    "StorageError",
    "UserNotFoundError",
    "round_half_up",
]
