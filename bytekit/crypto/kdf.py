"""
Password-based key derivation for bytekit.

Key and IV come from one PBKDF2-HMAC-SHA1 output stream (RFC 2898):
the first key_length bytes form the key, the next iv_length bytes the IV.
Derivation is deterministic; the same inputs always give the same material.
"""

import logging
from typing import NamedTuple, Optional, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..config import DerivationConfig
from ..errors import InvalidArgumentError


logger = logging.getLogger(__name__)


class KeyDerivationError(Exception):
    """Raised when the underlying derivation primitive fails."""
    pass


class KeyMaterial(NamedTuple):
    """Derived key and initialization vector."""
    key: bytes
    iv: bytes


def derive(
    password: Union[str, bytes],
    salt: bytes,
    iteration_count: int,
    key_length: int,
    iv_length: int
) -> KeyMaterial:
    """
    Derive a key and IV from a password.

    Args:
        password: Password; str is UTF-8 encoded
        salt: Salt bytes
        iteration_count: PBKDF2 iteration count
        key_length: Key length in bytes
        iv_length: IV length in bytes (may be 0)

    Returns:
        KeyMaterial(key, iv)

    Raises:
        InvalidArgumentError: If password or salt is None, or a length or
            count is out of range
        KeyDerivationError: If the derivation primitive fails
    """
    if password is None:
        raise InvalidArgumentError("password must not be None")
    if salt is None:
        raise InvalidArgumentError("salt must not be None")
    if iteration_count < 1:
        raise InvalidArgumentError("iteration_count must be positive")
    if key_length < 1:
        raise InvalidArgumentError("key_length must be positive")
    if iv_length < 0:
        raise InvalidArgumentError("iv_length must not be negative")

    if isinstance(password, str):
        password = password.encode('utf-8')

    try:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA1(),
            length=key_length + iv_length,
            salt=bytes(salt),
            iterations=iteration_count,
        )
        stream = kdf.derive(bytes(password))
    except Exception as e:
        raise KeyDerivationError(f"Key derivation failed: {str(e)}") from e

    logger.debug(f"Derived {key_length}-byte key and {iv_length}-byte IV "
                 f"({iteration_count} iterations)")
    return KeyMaterial(key=stream[:key_length], iv=stream[key_length:])


def derive_from_config(
    password: Union[str, bytes],
    config: Optional[DerivationConfig] = None,
    key_length: Optional[int] = None,
    iv_length: Optional[int] = None
) -> KeyMaterial:
    """
    Derive a key and IV using the parameters of a DerivationConfig.

    Lengths set in the config take precedence over the ones passed in,
    which are usually the cipher's defaults.

    Args:
        password: Password; str is UTF-8 encoded
        config: Derivation parameters (default: reference configuration)
        key_length: Fallback key length in bytes
        iv_length: Fallback IV length in bytes

    Returns:
        KeyMaterial(key, iv)
    """
    if config is None:
        config = DerivationConfig()

    key_length = config.key_length if config.key_length is not None else key_length
    iv_length = config.iv_length if config.iv_length is not None else iv_length
    if key_length is None or iv_length is None:
        raise InvalidArgumentError("Key and IV lengths must be set in the config or passed in")

    return derive(password, config.salt, config.iterations, key_length, iv_length)
