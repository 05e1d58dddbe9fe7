"""Credential handling for Roster."""

from .credentials import AuthenticationError, CredentialCodec

__all__ = ["AuthenticationError", "CredentialCodec"]
