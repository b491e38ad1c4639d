"""Envelope encryption for the stored API token.

The key is SHA-256 over machine identity strings (platform, architecture,
home directory). It keeps the token unreadable to casual inspection of the
config directory; it is not a defense against code running as the same user.

Envelope format: ``<iv hex>:<ciphertext hex>`` with AES-256-CBC and PKCS7
padding, a fresh 16-byte IV per encryption.
"""

import hashlib
import os
import platform
import string
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

IV_SIZE = 16
KEY_SIZE = 32
DELIMITER = ':'

_HEX_DIGITS = frozenset(string.hexdigits)

# platform.machine() values -> architecture ids used in existing envelopes
_ARCH_ALIASES = {
    'x86_64': 'x64',
    'amd64': 'x64',
    'aarch64': 'arm64',
    'arm64': 'arm64',
    'i386': 'ia32',
    'i686': 'ia32',
    'x86': 'ia32',
    'armv7l': 'arm',
    'armv6l': 'arm',
    'ppc64le': 'ppc64',
    's390x': 's390x',
}


class DecryptStatus(Enum):
    OK = "ok"
    MISSING = "missing"
    UNREADABLE = "unreadable"
    MALFORMED = "malformed"
    DECRYPT_FAILED = "decrypt_failed"


@dataclass
class DecryptResult:
    """Outcome of reading an envelope. ``value`` is set only when ``ok``."""
    status: DecryptStatus
    value: str | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status is DecryptStatus.OK


def derive_key(platform_id: str, arch_id: str, home_dir: str) -> bytes:
    """SHA-256 of the concatenated identity strings, used directly as the AES key."""
    return hashlib.sha256(f"{platform_id}{arch_id}{home_dir}".encode('utf-8')).digest()


def machine_identity() -> tuple[str, str, str]:
    """Return (platform_id, arch_id, home_dir) for the current user."""
    machine = platform.machine().lower()
    arch = _ARCH_ALIASES.get(machine, machine)
    return sys.platform, arch, str(Path.home())


def machine_key() -> bytes:
    return derive_key(*machine_identity())


def encrypt(plaintext: str, key: bytes, iv: bytes | None = None) -> str:
    """Encrypt ``plaintext`` and return the hex envelope."""
    if len(key) != KEY_SIZE:
        raise ValueError(f"key must be {KEY_SIZE} bytes")
    iv = iv if iv is not None else os.urandom(IV_SIZE)
    if len(iv) != IV_SIZE:
        raise ValueError(f"iv must be {IV_SIZE} bytes")

    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(plaintext.encode('utf-8')) + padder.finalize()

    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()
    return f"{iv.hex()}{DELIMITER}{ciphertext.hex()}"


def _is_hex(text: str) -> bool:
    return bool(text) and len(text) % 2 == 0 and all(c in _HEX_DIGITS for c in text)


def decrypt(envelope: str, key: bytes) -> DecryptResult:
    """Decrypt a hex envelope. Never raises; failures come back as a status."""
    parts = envelope.strip().split(DELIMITER)
    if len(parts) != 2 or not all(_is_hex(p) for p in parts):
        return DecryptResult(DecryptStatus.MALFORMED, detail="expected '<iv hex>:<ciphertext hex>'")

    iv, ciphertext = bytes.fromhex(parts[0]), bytes.fromhex(parts[1])
    if len(iv) != IV_SIZE:
        return DecryptResult(DecryptStatus.MALFORMED, detail=f"iv is {len(iv)} bytes, expected {IV_SIZE}")
    if len(ciphertext) % (algorithms.AES.block_size // 8):
        return DecryptResult(DecryptStatus.MALFORMED, detail="ciphertext is not a whole number of blocks")

    try:
        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        plaintext = (unpadder.update(padded) + unpadder.finalize()).decode('utf-8')
    except (ValueError, UnicodeDecodeError) as e:
        # Wrong key material or corrupted ciphertext both surface as bad padding
        return DecryptResult(DecryptStatus.DECRYPT_FAILED, detail=str(e) or type(e).__name__)

    return DecryptResult(DecryptStatus.OK, value=plaintext)
