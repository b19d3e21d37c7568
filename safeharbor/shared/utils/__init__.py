"""Shared utilities for SafeHarbor."""
from .pii import hash_pii, configure_pii_salt, fingerprint_responses

__all__ = ["hash_pii", "configure_pii_salt", "fingerprint_responses"]
