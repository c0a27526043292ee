"""
Cryptographic layer for bytekit.

This module provides:
- Password-based key derivation (PBKDF2)
- Block cipher providers (3DES, AES)
- Buffer encryption and decryption
"""

from .cipher import CipherProvider, TRIPLE_DES, AES, get_provider, largest_supported_key_size
from .kdf import derive, derive_from_config, KeyMaterial, KeyDerivationError
from .codec import (
    transform,
    encrypt_bytes,
    decrypt_bytes,
    encrypt_string,
    decrypt_to_string,
    CryptResult,
    DecryptionError,
)

__all__ = [
    'CipherProvider',
    'TRIPLE_DES',
    'AES',
    'get_provider',
    'largest_supported_key_size',
    'derive',
    'derive_from_config',
    'KeyMaterial',
    'KeyDerivationError',
    'transform',
    'encrypt_bytes',
    'decrypt_bytes',
    'encrypt_string',
    'decrypt_to_string',
    'CryptResult',
    'DecryptionError',
]
