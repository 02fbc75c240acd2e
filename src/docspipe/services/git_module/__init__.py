from .core import GitClient

from .exceptions import (
    GitExceptions,
    VCSLookupError,
    VCSTagError,
    VCSPushError,
)

__all__ = [
    "GitClient",
    "GitExceptions",
    "VCSLookupError",
    "VCSTagError",
    "VCSPushError",
]
