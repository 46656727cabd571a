"""Content fingerprinting for placeholder salts and asset checks.

Example:
    >>> from texmark.utils.hashing import hash_str
    >>> hash_str("hello world", truncate=8)
    'b94d27b9'
"""

import hashlib


def hash_str(
    content: str,
    truncate: int | None = None,
    algorithm: str = "sha256",
) -> str:
    """Hash string content (UTF-8 encoded).

    Args:
        content: String content to hash
        truncate: Keep only the first N hex characters (None = full digest)
        algorithm: Any name accepted by ``hashlib.new``

    Returns:
        Hex digest, optionally truncated
    """
    return hash_bytes(content.encode("utf-8"), truncate=truncate, algorithm=algorithm)


def hash_bytes(
    content: bytes,
    truncate: int | None = None,
    algorithm: str = "sha256",
) -> str:
    """Hash raw bytes.

    Args:
        content: Bytes to hash
        truncate: Keep only the first N hex characters (None = full digest)
        algorithm: Any name accepted by ``hashlib.new``

    Returns:
        Hex digest, optionally truncated
    """
    hasher = hashlib.new(algorithm)
    hasher.update(content)
    digest = hasher.hexdigest()
    return digest[:truncate] if truncate is not None else digest
