"""Blob encryption."""

from .cipher import Cipher, IdentityCipher

__all__ = ["Cipher", "IdentityCipher"]
