"""
Configuration management for bytekit.

Derivation parameters (salt, iteration count, key and IV lengths, cipher) are
held in a DerivationConfig value. The defaults reproduce the reference
configuration bit-exactly. A BytekitConfig manager persists a config as JSON
and applies environment overrides on load.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import InvalidArgumentError


logger = logging.getLogger(__name__)

# Reference derivation parameters
DEFAULT_SALT = bytes([
    0x10, 0x20, 0x12, 0x23, 0x37, 0xA4, 0xC5, 0xA6,
    0xF1, 0xF0, 0xEE, 0x21, 0x22, 0x45,
])
DEFAULT_ITERATIONS = 1234
DEFAULT_CIPHER = "3des"
MIN_SALT_LENGTH = 8

ENV_PREFIX = "BYTEKIT_"
CONFIG_FILE_NAME = "config.json"


class ConfigError(Exception):
    """Raised when configuration operations fail."""
    pass


@dataclass(frozen=True)
class DerivationConfig:
    """
    Parameters for password-based key derivation.

    Fields:
        salt: Salt bytes, at least 8
        iterations: PBKDF2 iteration count
        key_length: Key length in bytes, None to use the cipher's largest key
        iv_length: IV length in bytes, None to use the cipher's block size
        cipher: Cipher provider name
    """
    salt: bytes = DEFAULT_SALT
    iterations: int = DEFAULT_ITERATIONS
    key_length: Optional[int] = None
    iv_length: Optional[int] = None
    cipher: str = DEFAULT_CIPHER

    def __post_init__(self):
        """Validate configuration fields."""
        from .crypto.cipher import get_provider

        if self.salt is None or len(self.salt) < MIN_SALT_LENGTH:
            raise ConfigError(f"Salt must be at least {MIN_SALT_LENGTH} bytes")
        if self.iterations < 1:
            raise ConfigError("Iteration count must be positive")
        if self.key_length is not None and self.key_length < 1:
            raise ConfigError("Key length must be positive")
        if self.iv_length is not None and self.iv_length < 1:
            raise ConfigError("IV length must be positive")
        try:
            get_provider(self.cipher)
        except InvalidArgumentError as e:
            raise ConfigError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-friendly dict (salt as hex)."""
        return {
            'salt': self.salt.hex(),
            'iterations': self.iterations,
            'key_length': self.key_length,
            'iv_length': self.iv_length,
            'cipher': self.cipher,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DerivationConfig':
        """
        Build a config from a dict as produced by to_dict.

        Missing keys fall back to the defaults.

        Raises:
            ConfigError: If a value has the wrong format
        """
        try:
            salt = bytes.fromhex(data['salt']) if 'salt' in data else DEFAULT_SALT
            return cls(
                salt=salt,
                iterations=int(data.get('iterations', DEFAULT_ITERATIONS)),
                key_length=_optional_int(data.get('key_length')),
                iv_length=_optional_int(data.get('iv_length')),
                cipher=str(data.get('cipher', DEFAULT_CIPHER)),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid derivation config: {e}") from e


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


class BytekitConfig:
    """
    Configuration manager for bytekit.

    Stores a DerivationConfig as JSON in the config directory. Environment
    variables BYTEKIT_SALT (hex), BYTEKIT_ITERATIONS and BYTEKIT_CIPHER
    override stored values on load.
    """

    def __init__(self, config_dir: str = None):
        """
        Initialize configuration.

        Args:
            config_dir: Directory for configuration files. Defaults to ~/.bytekit/
        """
        if config_dir is None:
            config_dir = os.path.expanduser("~/.bytekit")

        self.config_dir = config_dir
        self.config_file_path = os.path.join(config_dir, CONFIG_FILE_NAME)

    def config_exists(self) -> bool:
        """Check if a config file exists."""
        return os.path.exists(self.config_file_path)

    def get_derivation_config(self) -> DerivationConfig:
        """
        Load the derivation config.

        Falls back to the defaults when no config file exists.

        Returns:
            DerivationConfig with environment overrides applied

        Raises:
            ConfigError: If the file cannot be read or holds invalid values
        """
        data: Dict[str, Any] = {}
        if self.config_exists():
            try:
                with open(self.config_file_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                raise ConfigError(f"Failed to read config {self.config_file_path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(f"Config {self.config_file_path} must hold a JSON object")
            logger.info(f"Loaded derivation config from {self.config_file_path}")

        data.update(self._env_overrides())
        return DerivationConfig.from_dict(data)

    def save_derivation_config(self, config: DerivationConfig) -> None:
        """
        Persist a derivation config.

        Args:
            config: Config to save

        Raises:
            ConfigError: If the file cannot be written
        """
        try:
            os.makedirs(self.config_dir, exist_ok=True)
            with open(self.config_file_path, 'w', encoding='utf-8') as f:
                json.dump(config.to_dict(), f, indent=2, sort_keys=True)
        except OSError as e:
            raise ConfigError(f"Failed to save config: {e}") from e
        logger.info(f"Derivation config saved to: {self.config_file_path}")

    @staticmethod
    def _env_overrides() -> Dict[str, Any]:
        overrides: Dict[str, Any] = {}
        for field in ('salt', 'iterations', 'cipher'):
            value = os.environ.get(ENV_PREFIX + field.upper())
            if value:
                overrides[field] = value
        return overrides
