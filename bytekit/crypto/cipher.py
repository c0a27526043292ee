"""
Block cipher providers.

A provider describes what a block cipher accepts (legal key sizes and block
size, both in bits) and builds CBC ciphers from derived key material. The
ciphers themselves come from the cryptography package.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Optional

from cryptography.hazmat.decrepit.ciphers.algorithms import TripleDES
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..errors import InvalidArgumentError


# Probing range for key sizes, in bits, highest first
KEY_SIZE_CANDIDATES = range(1024, 0, -1)


def largest_supported_key_size(candidates: Iterable[int],
                               supported: FrozenSet[int]) -> Optional[int]:
    """
    Pick the largest candidate key size the cipher accepts.

    Args:
        candidates: Key sizes in bits, in any order
        supported: Key sizes in bits the cipher accepts

    Returns:
        The highest accepted candidate, or None if none is accepted
    """
    for size in sorted(set(candidates), reverse=True):
        if size in supported:
            return size
    return None


@dataclass(frozen=True)
class CipherProvider:
    """
    Capabilities of a block cipher and a factory for it.

    Fields:
        name: Short lookup name
        algorithm: cryptography algorithm class, called with the key
        key_sizes: Legal key sizes in bits for CBC use
        block_size: Block size in bits
    """
    name: str
    algorithm: type
    key_sizes: FrozenSet[int]
    block_size: int

    def is_valid_key_size(self, bits: int) -> bool:
        """Check whether the cipher accepts a key of the given size."""
        return bits in self.key_sizes

    def select_key_size(self, candidates: Iterable[int] = KEY_SIZE_CANDIDATES) -> int:
        """
        Select the largest key size the cipher accepts.

        Raises:
            InvalidArgumentError: If no candidate is accepted
        """
        size = largest_supported_key_size(candidates, self.key_sizes)
        if size is None:
            raise InvalidArgumentError(f"No supported key size for {self.name}")
        return size

    @property
    def block_bytes(self) -> int:
        """Block size in bytes, which is also the IV length."""
        return self.block_size // 8

    def create_cipher(self, key: bytes, iv: bytes) -> Cipher:
        """
        Build a CBC cipher for the given key material.

        Args:
            key: Key bytes, length must match a legal key size
            iv: Initialization vector, one block long

        Returns:
            cryptography Cipher object
        """
        if not self.is_valid_key_size(len(key) * 8):
            raise InvalidArgumentError(f"{self.name} does not accept a {len(key) * 8}-bit key")
        if len(iv) != self.block_bytes:
            raise InvalidArgumentError(f"{self.name} requires a {self.block_bytes}-byte IV")
        return Cipher(self.algorithm(key), modes.CBC(iv))


TRIPLE_DES = CipherProvider(
    name="3des",
    algorithm=TripleDES,
    key_sizes=frozenset({128, 192}),
    block_size=64,
)

AES = CipherProvider(
    name="aes",
    algorithm=algorithms.AES,
    key_sizes=frozenset({128, 192, 256}),
    block_size=128,
)

PROVIDERS: Dict[str, CipherProvider] = {
    TRIPLE_DES.name: TRIPLE_DES,
    AES.name: AES,
}


def get_provider(name: str) -> CipherProvider:
    """
    Look up a cipher provider by name.

    Raises:
        InvalidArgumentError: If the name is unknown
    """
    try:
        return PROVIDERS[name.lower()]
    except (KeyError, AttributeError):
        raise InvalidArgumentError(f"Unknown cipher: {name!r}") from None
