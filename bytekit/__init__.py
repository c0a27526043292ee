"""
bytekit - byte buffer primitives.

Small, pure operations over in-memory byte buffers.

Key Features:
- Concatenation, fixed-size and separator splitting
- First-occurrence search
- Escape-delimited frame extraction (0x10 0x03 terminator)
- Password-based encryption with PBKDF2-derived key and IV

Basic Usage:
    >>> from bytekit import packetize, transform
    >>>
    >>> # Cut a stream into frames
    >>> list(packetize(b"\\x41\\x10\\x03\\x42"))
    [b'A\\x10\\x03', b'B']
    >>>
    >>> # Encrypt and decrypt
    >>> ciphertext = transform("secret", b"Hello!", encrypt=True).unwrap()
    >>> transform("secret", ciphertext, encrypt=False).unwrap()
    b'Hello!'
"""

__version__ = "1.0.0"
__author__ = "bytekit Team"

# Buffer primitives
from .buffer.ops import concat, split, split_on
from .buffer.search import find_first, NOT_FOUND
from .buffer.utils import to_hex_string, parse_hex

# Framing
from .protocol.framing import packetize, is_terminated, FrameExtractor, Frame

# Cryptography
from .crypto.kdf import derive, derive_from_config, KeyMaterial, KeyDerivationError
from .crypto.cipher import CipherProvider, get_provider, largest_supported_key_size
from .crypto.codec import (
    transform,
    encrypt_bytes,
    decrypt_bytes,
    encrypt_string,
    decrypt_to_string,
    CryptResult,
    DecryptionError,
)

# Configuration and errors
from .config import DerivationConfig, BytekitConfig, ConfigError
from .errors import InvalidArgumentError


__all__ = [
    # Version info
    '__version__',

    # Buffer primitives
    'concat',
    'split',
    'split_on',
    'find_first',
    'NOT_FOUND',
    'to_hex_string',
    'parse_hex',

    # Framing
    'packetize',
    'is_terminated',
    'FrameExtractor',
    'Frame',

    # Cryptography
    'derive',
    'derive_from_config',
    'KeyMaterial',
    'CipherProvider',
    'get_provider',
    'largest_supported_key_size',
    'transform',
    'encrypt_bytes',
    'decrypt_bytes',
    'encrypt_string',
    'decrypt_to_string',
    'CryptResult',

    # Configuration
    'DerivationConfig',
    'BytekitConfig',

    # Errors
    'InvalidArgumentError',
    'KeyDerivationError',
    'DecryptionError',
    'ConfigError',
]
