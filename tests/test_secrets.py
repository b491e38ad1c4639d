"""
Unit tests for the encrypted token store.

Run with:
    pytest tests/test_secrets.py -v
"""

import hashlib
import os
import stat
import sys

import pytest

from ai_cz.secrets import (
    DecryptStatus,
    SecretStoreError,
    TOKEN_FILENAME,
    TokenStore,
    decrypt,
    derive_key,
    encrypt,
    machine_identity,
    mask_token,
    validate_token,
)
from ai_cz.secrets import store as store_module

from tests.conftest import TEST_KEY

TOKEN = "sk-test-0123456789abcdefghij"


# ---------------------------------------------------------------------------
# Key derivation
# ---------------------------------------------------------------------------

class TestDeriveKey:

    def test_is_sha256_of_concatenated_inputs(self):
        expected = hashlib.sha256(b"linuxx64/home/alice").digest()
        assert derive_key("linux", "x64", "/home/alice") == expected

    def test_is_32_bytes(self):
        assert len(derive_key("darwin", "arm64", "/Users/bob")) == 32

    def test_deterministic(self):
        assert derive_key("linux", "x64", "/home/a") == derive_key("linux", "x64", "/home/a")

    @pytest.mark.parametrize("other", [
        ("darwin", "x64", "/home/a"),
        ("linux", "arm64", "/home/a"),
        ("linux", "x64", "/home/b"),
    ])
    def test_differs_when_any_input_differs(self, other):
        assert derive_key("linux", "x64", "/home/a") != derive_key(*other)

    def test_machine_identity_uses_home_and_platform(self, tmp_path):
        platform_id, arch_id, home = machine_identity()
        assert platform_id == sys.platform
        assert arch_id
        assert home == str(tmp_path / "home")


# ---------------------------------------------------------------------------
# Envelope encryption
# ---------------------------------------------------------------------------

class TestEnvelope:

    def test_round_trip(self):
        result = decrypt(encrypt(TOKEN, TEST_KEY), TEST_KEY)
        assert result.ok
        assert result.value == TOKEN

    @pytest.mark.parametrize("plaintext", ["", "x", "a" * 16, "ünïcødé 🔑", "sk-" + "z" * 200])
    def test_round_trip_various_lengths(self, plaintext):
        assert decrypt(encrypt(plaintext, TEST_KEY), TEST_KEY).value == plaintext

    def test_fresh_iv_each_time(self):
        first = encrypt(TOKEN, TEST_KEY)
        second = encrypt(TOKEN, TEST_KEY)
        assert first != second
        assert decrypt(first, TEST_KEY).value == decrypt(second, TEST_KEY).value == TOKEN

    def test_format_is_two_hex_fields(self):
        iv_hex, ct_hex = encrypt(TOKEN, TEST_KEY).split(":")
        assert len(iv_hex) == 32
        assert len(ct_hex) % 32 == 0
        int(iv_hex, 16)
        int(ct_hex, 16)

    def test_fixed_iv_is_deterministic(self):
        iv = bytes(16)
        assert encrypt(TOKEN, TEST_KEY, iv=iv) == encrypt(TOKEN, TEST_KEY, iv=iv)
        assert encrypt(TOKEN, TEST_KEY, iv=iv).startswith("0" * 32 + ":")

    def test_rejects_short_key(self):
        with pytest.raises(ValueError):
            encrypt(TOKEN, b"short")

    @pytest.mark.parametrize("envelope", [
        "",
        "nodelimiter",
        "a:b:c",
        ":" + "00" * 16,
        "00" * 16 + ":",
        "zz" * 16 + ":" + "00" * 16,
        "00" * 16 + ":" + "0",
        "00" * 8 + ":" + "00" * 16,
        "00" * 16 + ":" + "00" * 5,
    ])
    def test_malformed_envelopes(self, envelope):
        result = decrypt(envelope, TEST_KEY)
        assert result.status is DecryptStatus.MALFORMED
        assert result.value is None

    def test_wrong_key_fails(self):
        envelope = encrypt(TOKEN, TEST_KEY)
        result = decrypt(envelope, derive_key("other", "machine", "/nowhere"))
        assert not result.ok
        assert result.status is DecryptStatus.DECRYPT_FAILED

    def test_trailing_newline_tolerated(self):
        envelope = encrypt(TOKEN, TEST_KEY) + "\n"
        assert decrypt(envelope, TEST_KEY).value == TOKEN


# ---------------------------------------------------------------------------
# TokenStore
# ---------------------------------------------------------------------------

class TestTokenStore:

    def test_get_when_absent(self, store):
        assert store.get() is None
        assert store.read().status is DecryptStatus.MISSING
        assert store.has_token() is False

    def test_set_then_get(self, store):
        store.set(TOKEN)
        assert store.get() == TOKEN
        assert store.has_token() is True

    def test_set_creates_config_dir(self, store):
        assert not store.config_dir.exists()
        store.set(TOKEN)
        assert store.token_file == store.config_dir / TOKEN_FILENAME
        assert store.token_file.exists()

    def test_file_holds_envelope_not_plaintext(self, store):
        store.set(TOKEN)
        content = store.token_file.read_text()
        assert TOKEN not in content
        assert content.count(":") == 1

    def test_set_overwrites(self, store):
        store.set(TOKEN)
        store.set("sk-replacement-token-000")
        assert store.get() == "sk-replacement-token-000"

    def test_no_temp_files_left_behind(self, store):
        store.set(TOKEN)
        assert [p.name for p in store.config_dir.iterdir()] == [TOKEN_FILENAME]

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_file_is_private(self, store):
        store.set(TOKEN)
        assert stat.S_IMODE(os.stat(store.token_file).st_mode) == 0o600

    def test_corrupt_file_reads_as_absent(self, store):
        store.config_dir.mkdir(parents=True)
        store.token_file.write_text("garbage")
        assert store.get() is None
        assert store.read().status is DecryptStatus.MALFORMED

    def test_other_machine_key_reads_as_absent(self, store):
        store.set(TOKEN)
        other = TokenStore(store.config_dir, key=derive_key("win32", "x64", "C:\\Users\\x"))
        assert other.get() is None
        assert other.has_token() is False

    def test_default_key_comes_from_machine(self, tmp_path):
        first = TokenStore(tmp_path / "a")
        first.set(TOKEN)
        assert TokenStore(tmp_path / "a").get() == TOKEN

    def test_clear_removes_file(self, store):
        store.set(TOKEN)
        assert store.clear() is True
        assert not store.token_file.exists()
        assert store.get() is None

    def test_clear_twice_is_safe(self, store):
        store.set(TOKEN)
        assert store.clear() is True
        assert store.clear() is False

    def test_clear_when_never_set(self, store):
        assert store.clear() is False

    def test_failed_write_keeps_previous_envelope(self, store, monkeypatch):
        store.set(TOKEN)
        before = store.token_file.read_text()

        def boom(src, dst):
            raise OSError("disk full")
        monkeypatch.setattr(store_module.os, "replace", boom)

        with pytest.raises(SecretStoreError, match="disk full"):
            store.set("sk-new-token-that-fails")

        assert store.token_file.read_text() == before
        assert store.get() == TOKEN
        assert [p.name for p in store.config_dir.iterdir()] == [TOKEN_FILENAME]

    def test_failed_write_without_previous_leaves_nothing(self, store, monkeypatch):
        def boom(src, dst):
            raise OSError("permission denied")
        monkeypatch.setattr(store_module.os, "replace", boom)

        with pytest.raises(SecretStoreError):
            store.set(TOKEN)
        assert not store.token_file.exists()


# ---------------------------------------------------------------------------
# Token helpers
# ---------------------------------------------------------------------------

class TestTokenHelpers:

    def test_mask_shows_prefix_and_suffix(self):
        assert mask_token("sk-abcdefghijklmnop1234") == "sk-abcd...1234"

    def test_mask_never_contains_full_token(self):
        token = "sk-proj-averylongsecretvalue9876"
        assert token not in mask_token(token)

    @pytest.mark.parametrize("token", ["", "sk-", "sk-12345678"])
    def test_mask_short_tokens_fully(self, token):
        assert mask_token(token) == "***"

    @pytest.mark.parametrize("value, problem", [
        ("", "cannot be empty"),
        ("   ", "cannot be empty"),
        ("pk-123", "should start with 'sk-'"),
    ])
    def test_validate_rejects(self, value, problem):
        assert problem in validate_token(value)

    def test_validate_accepts_and_trims(self):
        assert validate_token("  sk-valid  ") is None
