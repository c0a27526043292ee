"""
Password-based encryption and decryption of buffers.

The codec picks the largest key the configured block cipher accepts, derives
key and IV from the password, and runs the cipher in CBC mode with PKCS#7
padding over the whole buffer in one pass.

A wrong password almost always shows up as invalid padding when decrypting,
which cannot be told apart from corrupted ciphertext. Both are reported as a
DecryptionError carried in the CryptResult; no partial output is returned.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from cryptography.hazmat.primitives import padding

from ..config import DerivationConfig
from ..errors import InvalidArgumentError
from .cipher import get_provider
from .kdf import derive_from_config


logger = logging.getLogger(__name__)


class DecryptionError(Exception):
    """Raised when decryption fails: wrong password or corrupt data."""
    pass


@dataclass(frozen=True)
class CryptResult:
    """
    Outcome of a transform.

    Exactly one of data and error is set.
    """
    data: Optional[bytes] = None
    error: Optional[DecryptionError] = None

    @classmethod
    def success(cls, data: bytes) -> 'CryptResult':
        return cls(data=data)

    @classmethod
    def failure(cls, error: DecryptionError) -> 'CryptResult':
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> bytes:
        """
        Get the output bytes.

        Raises:
            DecryptionError: If the transform failed
        """
        if self.error is not None:
            raise self.error
        return self.data


def transform(password: Union[str, bytes], data: bytes, encrypt: bool,
              config: Optional[DerivationConfig] = None) -> CryptResult:
    """
    Encrypt or decrypt a buffer with a password-derived key.

    Args:
        password: Password; str is UTF-8 encoded
        data: Plaintext to encrypt or ciphertext to decrypt
        encrypt: True to encrypt, False to decrypt
        config: Derivation parameters (default: reference configuration)

    Returns:
        CryptResult holding the output, or a DecryptionError if decryption
        failed

    Raises:
        InvalidArgumentError: If password or data is None
    """
    if data is None:
        raise InvalidArgumentError("data must not be None")
    if config is None:
        config = DerivationConfig()

    provider = get_provider(config.cipher)
    key_size = provider.select_key_size()
    logger.debug(f"Using {key_size}-bit key for {provider.name}")

    material = derive_from_config(password, config, key_size // 8, provider.block_bytes)
    cipher = provider.create_cipher(material.key, material.iv)
    pkcs7 = padding.PKCS7(provider.block_size)

    if encrypt:
        padder = pkcs7.padder()
        padded = padder.update(bytes(data)) + padder.finalize()
        encryptor = cipher.encryptor()
        return CryptResult.success(encryptor.update(padded) + encryptor.finalize())

    try:
        decryptor = cipher.decryptor()
        padded = decryptor.update(bytes(data)) + decryptor.finalize()
        unpadder = pkcs7.unpadder()
        plaintext = unpadder.update(padded) + unpadder.finalize()
    except ValueError as e:
        logger.warning(f"Decryption of {len(data)} bytes failed: {e}")
        return CryptResult.failure(
            DecryptionError("Decryption failed - wrong password or corrupt data")
        )

    return CryptResult.success(plaintext)


def encrypt_bytes(password: Union[str, bytes], data: bytes,
                  config: Optional[DerivationConfig] = None) -> bytes:
    """Encrypt a buffer and return the ciphertext."""
    return transform(password, data, True, config).unwrap()


def decrypt_bytes(password: Union[str, bytes], data: bytes,
                  config: Optional[DerivationConfig] = None) -> bytes:
    """
    Decrypt a buffer and return the plaintext.

    Raises:
        DecryptionError: If the password is wrong or the data is corrupt
    """
    return transform(password, data, False, config).unwrap()


def encrypt_string(password: Union[str, bytes], text: str, encoding: str = 'utf-8',
                   config: Optional[DerivationConfig] = None) -> bytes:
    """Encode a string and encrypt it."""
    return encrypt_bytes(password, text.encode(encoding), config)


def decrypt_to_string(password: Union[str, bytes], data: bytes, encoding: str = 'ascii',
                      errors: str = 'replace',
                      config: Optional[DerivationConfig] = None) -> str:
    """
    Decrypt a buffer and decode the plaintext.

    Bytes outside the encoding are replaced rather than rejected by default.

    Raises:
        DecryptionError: If the password is wrong or the data is corrupt
    """
    return decrypt_bytes(password, data, config).decode(encoding, errors)
