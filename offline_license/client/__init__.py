"""Checking-side helpers: checker, saved-license store and UI command bridge."""

from .bridge import CommandBridge, UnknownCommandError, build_bridge
from .checker import LicenseChecker
from .store import (
    FileLicenseStorage,
    InMemoryLicenseStorage,
    LicenseStorage,
    LicenseStore,
    can_use_all_features,
    create_storage,
)

__all__ = [
    "LicenseChecker",
    "LicenseStore",
    "LicenseStorage",
    "InMemoryLicenseStorage",
    "FileLicenseStorage",
    "create_storage",
    "can_use_all_features",
    "CommandBridge",
    "UnknownCommandError",
    "build_bridge",
]
