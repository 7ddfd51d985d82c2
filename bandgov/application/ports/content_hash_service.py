"""Content hash service port.

Hashes proposal content for the edit history. Implementations use
BLAKE3 and always return 32-byte digests.

Developer Golden Rules:
1. DETERMINISM - Same input always produces same output
2. 32 BYTES - All hashes are exactly 32 bytes (256 bits)
3. UTF-8 - Text content uses UTF-8 encoding
"""

from __future__ import annotations

from typing import Protocol


class ContentHashServiceProtocol(Protocol):
    """Protocol for content hashing operations."""

    def hash_content(self, content: bytes) -> bytes:
        """Hash raw bytes to a 32-byte digest."""
        ...

    def hash_text(self, text: str) -> bytes:
        """Hash UTF-8 encoded text to a 32-byte digest."""
        ...

    def verify_hash(self, content: bytes, expected_hash: bytes) -> bool:
        """Constant-time check that ``content`` hashes to ``expected_hash``.

        Raises:
            ValueError: If expected_hash is not 32 bytes.
        """
        ...
