"""
Security Tests for bytekit.

Tests key derivation, key size selection, encryption round trips and the
handling of wrong passwords and corrupt ciphertext.
"""

import pytest
import os
import hashlib
import logging
from bytekit.config import DerivationConfig, DEFAULT_SALT, DEFAULT_ITERATIONS
from bytekit.crypto.kdf import derive, derive_from_config, KeyMaterial
from bytekit.crypto.cipher import (
    TRIPLE_DES,
    AES,
    get_provider,
    largest_supported_key_size,
    KEY_SIZE_CANDIDATES,
)
from bytekit.crypto.codec import (
    transform,
    encrypt_bytes,
    decrypt_bytes,
    encrypt_string,
    decrypt_to_string,
    CryptResult,
    DecryptionError,
)
from bytekit.errors import InvalidArgumentError


class TestKeyDerivation:
    """Test password-based key derivation."""

    def test_reference_constants(self):
        """Test the reference salt and iteration count."""
        assert DEFAULT_SALT == bytes([
            0x10, 0x20, 0x12, 0x23, 0x37, 0xA4, 0xC5, 0xA6,
            0xF1, 0xF0, 0xEE, 0x21, 0x22, 0x45,
        ])
        assert len(DEFAULT_SALT) == 14
        assert DEFAULT_ITERATIONS == 1234

    def test_deterministic_derivation(self):
        """Test that identical inputs give identical key material."""
        first = derive("pw", DEFAULT_SALT, 1234, 24, 8)
        second = derive("pw", DEFAULT_SALT, 1234, 24, 8)

        assert first == second
        assert len(first.key) == 24
        assert len(first.iv) == 8

    def test_key_material_unpacks(self):
        """Test that KeyMaterial unpacks into key and IV."""
        key, iv = derive("pw", DEFAULT_SALT, 1234, 24, 8)
        assert isinstance(key, bytes)
        assert isinstance(iv, bytes)

    def test_matches_pbkdf2_sha1(self):
        """Test that key and IV are consecutive slices of one PBKDF2-SHA1 stream."""
        material = derive("pw", DEFAULT_SALT, 1234, 24, 8)
        expected = hashlib.pbkdf2_hmac('sha1', b"pw", DEFAULT_SALT, 1234, 32)

        assert material.key == expected[:24]
        assert material.iv == expected[24:]

    def test_stream_slicing(self):
        """Test that a longer derivation starts with the shorter one."""
        short = derive("pw", DEFAULT_SALT, 1234, 24, 8)
        long = derive("pw", DEFAULT_SALT, 1234, 32, 0)

        assert long.key == short.key + short.iv
        assert long.iv == b""

    def test_inputs_change_output(self):
        """Test that password, salt and iteration count all matter."""
        base = derive("pw", DEFAULT_SALT, 1234, 24, 8)

        assert derive("pw2", DEFAULT_SALT, 1234, 24, 8) != base
        assert derive("pw", DEFAULT_SALT[::-1], 1234, 24, 8) != base
        assert derive("pw", DEFAULT_SALT, 1235, 24, 8) != base

    def test_str_and_bytes_password(self):
        """Test that str passwords are UTF-8 encoded."""
        assert derive("pässword", DEFAULT_SALT, 10, 16, 8) == \
            derive("pässword".encode('utf-8'), DEFAULT_SALT, 10, 16, 8)

    def test_none_password(self):
        """Test that a None password is rejected."""
        with pytest.raises(InvalidArgumentError):
            derive(None, DEFAULT_SALT, 1234, 24, 8)

    @pytest.mark.parametrize("iterations,key_length,iv_length", [
        (0, 24, 8),
        (1234, 0, 8),
        (1234, 24, -1),
    ])
    def test_invalid_parameters(self, iterations: int, key_length: int, iv_length: int):
        """Test that out-of-range parameters are rejected."""
        with pytest.raises(InvalidArgumentError):
            derive("pw", DEFAULT_SALT, iterations, key_length, iv_length)

    def test_derive_from_config(self):
        """Test derivation through a DerivationConfig."""
        material = derive_from_config("pw", DerivationConfig(), 24, 8)
        assert material == derive("pw", DEFAULT_SALT, DEFAULT_ITERATIONS, 24, 8)

    def test_config_lengths_take_precedence(self):
        """Test that lengths set in the config override the fallbacks."""
        config = DerivationConfig(key_length=16, iv_length=8)
        material = derive_from_config("pw", config, 24, 16)

        assert len(material.key) == 16
        assert len(material.iv) == 8

    def test_missing_lengths(self):
        """Test that lengths must come from somewhere."""
        with pytest.raises(InvalidArgumentError):
            derive_from_config("pw", DerivationConfig())


class TestKeySizeSelection:
    """Test cipher capability handling."""

    def test_largest_supported_key_size(self):
        """Test that the highest accepted candidate wins."""
        supported = frozenset({128, 192})
        assert largest_supported_key_size([64, 128, 192, 256], supported) == 192
        assert largest_supported_key_size([256, 128], supported) == 128

    def test_no_supported_key_size(self):
        """Test that None is returned when nothing is accepted."""
        assert largest_supported_key_size([64, 256], frozenset({128})) is None
        assert largest_supported_key_size([], frozenset({128})) is None

    def test_provider_selection(self):
        """Test the key sizes picked for the built-in providers."""
        assert TRIPLE_DES.select_key_size() == 192
        assert AES.select_key_size() == 256
        assert max(KEY_SIZE_CANDIDATES) == 1024

    def test_block_sizes(self):
        """Test provider block sizes."""
        assert TRIPLE_DES.block_bytes == 8
        assert AES.block_bytes == 16

    def test_get_provider(self):
        """Test provider lookup by name."""
        assert get_provider("3des") is TRIPLE_DES
        assert get_provider("AES") is AES
        with pytest.raises(InvalidArgumentError):
            get_provider("rc4")

    def test_create_cipher_validates_key_material(self):
        """Test that mismatched key or IV lengths are rejected."""
        with pytest.raises(InvalidArgumentError):
            TRIPLE_DES.create_cipher(b"\x00" * 20, b"\x00" * 8)
        with pytest.raises(InvalidArgumentError):
            TRIPLE_DES.create_cipher(b"\x00" * 24, b"\x00" * 16)


class TestRoundTrip:
    """Test encryption and decryption round trips."""

    @pytest.mark.parametrize("size", [1, 7, 8, 9, 100, 4096])
    def test_basic_roundtrip(self, size: int):
        """Test that decrypt(encrypt(x)) == x."""
        plaintext = os.urandom(size)
        ciphertext = transform("password", plaintext, encrypt=True).unwrap()
        assert transform("password", ciphertext, encrypt=False).unwrap() == plaintext

    def test_ciphertext_padding(self):
        """Test that ciphertext is padded to whole blocks."""
        assert len(encrypt_bytes("pw", b"12345")) == 8
        assert len(encrypt_bytes("pw", b"12345678")) == 16

    def test_ciphertext_differs_from_plaintext(self):
        """Test that the plaintext does not appear in the ciphertext."""
        plaintext = b"attack at dawn, attack at dawn"
        ciphertext = encrypt_bytes("pw", plaintext)
        assert plaintext not in ciphertext

    def test_deterministic_encryption(self):
        """Test that a fixed salt gives the same ciphertext each time."""
        assert encrypt_bytes("pw", b"message") == encrypt_bytes("pw", b"message")

    def test_password_changes_ciphertext(self):
        """Test that different passwords give different ciphertext."""
        assert encrypt_bytes("pw1", b"message") != encrypt_bytes("pw2", b"message")

    def test_empty_plaintext(self):
        """Test that an empty plaintext round-trips as one padding block."""
        ciphertext = encrypt_bytes("pw", b"")
        assert len(ciphertext) == 8
        assert decrypt_bytes("pw", ciphertext) == b""

    def test_aes_roundtrip(self):
        """Test a round trip with the AES provider."""
        config = DerivationConfig(cipher="aes")
        ciphertext = encrypt_bytes("pw", b"hello aes", config)

        assert len(ciphertext) == 16
        assert decrypt_bytes("pw", ciphertext, config) == b"hello aes"

    def test_custom_config_roundtrip(self):
        """Test a round trip with custom derivation parameters."""
        config = DerivationConfig(salt=b"0123456789abcdef", iterations=50, key_length=16)
        ciphertext = encrypt_bytes("pw", b"custom", config)

        assert decrypt_bytes("pw", ciphertext, config) == b"custom"
        assert ciphertext != encrypt_bytes("pw", b"custom")

    def test_string_helpers(self):
        """Test string encryption and decryption helpers."""
        ciphertext = encrypt_string("pw", "Hello, World!")
        assert decrypt_to_string("pw", ciphertext) == "Hello, World!"

    def test_decrypt_to_string_replaces_non_ascii(self):
        """Test that non-ASCII bytes are replaced, not rejected."""
        ciphertext = encrypt_bytes("pw", "café".encode('utf-8'))
        text = decrypt_to_string("pw", ciphertext)

        assert text.startswith("caf")
        assert "�" in text
        assert decrypt_to_string("pw", ciphertext, encoding='utf-8') == "café"

    def test_none_data(self):
        """Test that None data is rejected."""
        with pytest.raises(InvalidArgumentError):
            transform("pw", None, encrypt=True)

    def test_none_password(self):
        """Test that a None password is rejected."""
        with pytest.raises(InvalidArgumentError):
            transform(None, b"data", encrypt=True)


class TestDecryptionFailure:
    """Test wrong passwords and corrupt ciphertext."""

    def test_wrong_password_does_not_raise(self):
        """Test that a wrong password never returns the plaintext."""
        plaintext = b"The quick brown fox jumps over the lazy dog"
        ciphertext = encrypt_bytes("right password", plaintext)

        result = transform("wrong password", ciphertext, encrypt=False)

        assert isinstance(result, CryptResult)
        assert result.data != plaintext
        if not result.ok:
            assert result.data is None
            assert isinstance(result.error, DecryptionError)

    def test_misaligned_ciphertext(self):
        """Test ciphertext that is not a whole number of blocks."""
        result = transform("pw", b"\x00" * 7, encrypt=False)

        assert not result.ok
        assert result.data is None
        with pytest.raises(DecryptionError):
            result.unwrap()

    def test_empty_ciphertext(self):
        """Test that empty ciphertext is reported as an error."""
        assert not transform("pw", b"", encrypt=False).ok

    def test_decrypt_bytes_raises(self):
        """Test that decrypt_bytes raises on failure."""
        with pytest.raises(DecryptionError):
            decrypt_bytes("pw", b"\x01" * 9)

    def test_truncated_ciphertext(self):
        """Test that dropping the last block is detected."""
        ciphertext = encrypt_bytes("pw", b"x" * 20)
        result = transform("pw", ciphertext[:-1], encrypt=False)
        assert not result.ok

    def test_failure_is_logged(self, caplog):
        """Test that a failed decryption is logged as a warning."""
        with caplog.at_level(logging.WARNING, logger="bytekit.crypto.codec"):
            transform("pw", b"\x00" * 7, encrypt=False)

        assert any(record.levelno == logging.WARNING for record in caplog.records)
        assert "pw" not in caplog.text

    def test_success_result(self):
        """Test the success result shape."""
        result = transform("pw", b"data", encrypt=True)

        assert result.ok
        assert result.error is None
        assert result.unwrap() == result.data
