"""Shared utilities for texmark."""

from texmark.utils.hashing import hash_bytes, hash_str
from texmark.utils.logger import get_logger

__all__ = ["get_logger", "hash_bytes", "hash_str"]
