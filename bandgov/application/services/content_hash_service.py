"""BLAKE3 content hash service.

Hashes canonical proposal content for the edit history so that two
edits producing the same content can be recognized.

Usage:
    from bandgov.application.services.content_hash_service import (
        Blake3ContentHashService,
    )

    service = Blake3ContentHashService()
    digest = service.hash_content(content.canonical_content_bytes())
"""

from __future__ import annotations

import hmac

import blake3

from bandgov.application.services.base import LoggingMixin


class Blake3ContentHashService(LoggingMixin):
    """BLAKE3 implementation of ContentHashServiceProtocol.

    Attributes:
        HASH_SIZE: Fixed output size in bytes (32)
    """

    HASH_SIZE: int = 32

    def __init__(self) -> None:
        self._init_logger(component="governance")

    def hash_content(self, content: bytes) -> bytes:
        """Hash raw bytes to a 32-byte BLAKE3 digest."""
        return blake3.blake3(content).digest()

    def hash_text(self, text: str) -> bytes:
        return self.hash_content(text.encode("utf-8"))

    def verify_hash(self, content: bytes, expected_hash: bytes) -> bool:
        """Verify that content matches the expected hash.

        Uses hmac.compare_digest() for a constant-time comparison.

        Args:
            content: Raw bytes content to verify
            expected_hash: Expected 32-byte BLAKE3 hash

        Returns:
            True if content hash matches expected_hash, False otherwise

        Raises:
            ValueError: If expected_hash is not 32 bytes
        """
        if len(expected_hash) != self.HASH_SIZE:
            raise ValueError(
                f"Expected hash must be {self.HASH_SIZE} bytes, got {len(expected_hash)}"
            )
        actual_hash = self.hash_content(content)
        return hmac.compare_digest(actual_hash, expected_hash)
