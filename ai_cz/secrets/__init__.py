"""Encrypted Token Storage Package"""

from ai_cz.secrets.crypto import (
    DecryptResult,
    DecryptStatus,
    decrypt,
    derive_key,
    encrypt,
    machine_identity,
    machine_key,
)
from ai_cz.secrets.store import (
    TOKEN_FILENAME,
    SecretStoreError,
    TokenStore,
    mask_token,
    validate_token,
)

__all__ = [
    "DecryptResult",
    "DecryptStatus",
    "SecretStoreError",
    "TOKEN_FILENAME",
    "TokenStore",
    "decrypt",
    "derive_key",
    "encrypt",
    "machine_identity",
    "machine_key",
    "mask_token",
    "validate_token",
]
