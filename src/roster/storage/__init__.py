"""Storage for employee photo uploads."""

from .local import LocalPhotoStore, SecurityException, StorageException

__all__ = ["LocalPhotoStore", "SecurityException", "StorageException"]
