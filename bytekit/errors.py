"""
Exceptions shared across bytekit layers.

Layer-specific failures live next to the code that raises them
(KeyDerivationError, DecryptionError, ConfigError).
"""


class InvalidArgumentError(ValueError):
    """Raised when an operation receives an argument it cannot work with."""
    pass
