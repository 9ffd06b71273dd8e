"""Pytest configuration shared across the suite."""

from __future__ import annotations

from . import _bootstrap  # noqa: F401

import pytest

from svrf.clients.keychain import SQLiteKeyChain
from svrf.services.credential_store import CredentialStore
from svrf.services.token_cipher import TokenCipherService


@pytest.fixture
def keychain(tmp_path) -> SQLiteKeyChain:
    return SQLiteKeyChain(tmp_path / "keychain.db")


@pytest.fixture
def cipher() -> TokenCipherService:
    return TokenCipherService(secret="secret-key")


@pytest.fixture
def credential_store(keychain: SQLiteKeyChain, cipher: TokenCipherService) -> CredentialStore:
    return CredentialStore(keychain, cipher)
