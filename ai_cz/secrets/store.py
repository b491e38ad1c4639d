"""Encrypted-at-rest storage for a single API token."""

import logging
import os
import tempfile
from pathlib import Path

from ai_cz.secrets.crypto import DecryptResult, DecryptStatus, decrypt, encrypt, machine_key

logger = logging.getLogger(__name__)

TOKEN_FILENAME = "token.enc"
TOKEN_PREFIX = "sk-"


class SecretStoreError(Exception):
    """Raised when the token file cannot be written or removed."""
    pass


def mask_token(token: str) -> str:
    """Display form of a token: first 7 and last 4 characters."""
    if len(token) <= 11:
        return "***"
    return f"{token[:7]}...{token[-4:]}"


def validate_token(value: str) -> str | None:
    """Return an error message for an unacceptable token, else None."""
    value = value.strip()
    if not value:
        return "API token cannot be empty"
    if not value.startswith(TOKEN_PREFIX):
        return f"API token should start with '{TOKEN_PREFIX}'"
    return None


class TokenStore:
    """Stores one token as an encrypted envelope in ``config_dir``.

    The key is recomputed from the machine identity on every run unless one
    is passed in, so tests can use a fixed key.
    """

    def __init__(self, config_dir: Path, key: bytes | None = None):
        self.config_dir = Path(config_dir)
        self.token_file = self.config_dir / TOKEN_FILENAME
        self._key = key if key is not None else machine_key()

    def read(self) -> DecryptResult:
        """Read and decrypt the envelope, reporting why it is unusable."""
        try:
            envelope = self.token_file.read_text(encoding='utf-8')
        except FileNotFoundError:
            return DecryptResult(DecryptStatus.MISSING)
        except (OSError, UnicodeDecodeError) as e:
            return DecryptResult(DecryptStatus.UNREADABLE, detail=str(e))
        return decrypt(envelope, self._key)

    def get(self) -> str | None:
        result = self.read()
        if result.ok:
            return result.value or None
        if result.status is not DecryptStatus.MISSING:
            logger.info("Ignoring stored token at %s (%s: %s)",
                        self.token_file, result.status.value, result.detail)
        return None

    def set(self, token: str) -> None:
        """Encrypt and write the token, replacing any previous envelope.

        Only logs on success; the user-facing confirmation is printed by
        ai_cz.cli.commands.save_token.
        """
        envelope = encrypt(token, self._key)
        try:
            self._ensure_config_dir()
            self._write_atomic(envelope)
        except OSError as e:
            raise SecretStoreError(f"Could not save token to {self.token_file}: {e}") from e
        logger.info("Saved encrypted token to %s", self.token_file)

    def has_token(self) -> bool:
        return self.get() is not None

    def clear(self) -> bool:
        """Delete the envelope. Returns False if there was nothing to delete."""
        try:
            self.token_file.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise SecretStoreError(f"Could not remove {self.token_file}: {e}") from e
        logger.info("Removed %s", self.token_file)
        return True

    def _ensure_config_dir(self) -> None:
        if not self.config_dir.exists():
            self.config_dir.mkdir(parents=True, exist_ok=True)
            try:
                os.chmod(self.config_dir, 0o700)
            except OSError:
                logger.debug("Could not restrict permissions on %s", self.config_dir)

    def _write_atomic(self, envelope: str) -> None:
        fd, tmp_name = tempfile.mkstemp(dir=self.config_dir, prefix='.token.', suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(envelope)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, self.token_file)
        except OSError:
            try:
                os.unlink(tmp_name)
            except OSError:
                logger.debug("Could not remove temp file %s", tmp_name)
            raise
