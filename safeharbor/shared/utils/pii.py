"""Identifier hashing for logs.

Assessment outcomes are logged by the service layer; user identifiers
never appear in logs in clear text.
"""
import hashlib
import logging
from typing import Optional

logger = logging.getLogger(__name__)

MIN_SALT_LENGTH = 32

_PII_SALT: Optional[str] = None


def configure_pii_salt(salt: str) -> None:
    """Configure the salt used by hash_pii().

    Must be called during application startup.

    Raises:
        ValueError: If salt is empty or shorter than MIN_SALT_LENGTH
    """
    global _PII_SALT
    if not salt or len(salt) < MIN_SALT_LENGTH:
        logger.critical(
            "PII_SALT_CONFIGURATION_FAILED",
            extra={"reason": "Salt too short or empty", "min_length": MIN_SALT_LENGTH}
        )
        raise ValueError(f"PII salt must be at least {MIN_SALT_LENGTH} characters")

    _PII_SALT = salt
    logger.info("PII_SALT_CONFIGURED", extra={"salt_length": len(salt)})


def hash_pii(value: str) -> str:
    """Salted SHA-256 of a user identifier, safe for logging.

    Raises:
        RuntimeError: If the salt has not been configured
    """
    if _PII_SALT is None:
        logger.critical(
            "PII_HASH_FAILED",
            extra={"reason": "Salt not configured", "action": "call configure_pii_salt()"}
        )
        raise RuntimeError("PII salt not configured. Call configure_pii_salt() first.")

    return hashlib.sha256(f"{_PII_SALT}{value}".encode()).hexdigest()


def fingerprint_responses(responses: dict) -> str:
    """Order-independent hash of a response set for audit correlation."""
    canonical = ",".join(f"{key}={responses[key]}" for key in sorted(responses))
    return hashlib.sha256(canonical.encode()).hexdigest()
