"""Tests for PJLink digest authentication."""

from __future__ import annotations

import hashlib

import pytest

from pjctl.exceptions import AuthRequiredError, HashComputationFailedError
from pjctl.protocol import Authenticator, compute_digest, DIGEST_LENGTH


def test_digest_is_md5_of_salt_then_secret():
    expected = hashlib.md5(b'abc123' + b'secret').hexdigest()
    assert compute_digest("abc123", "secret") == expected


def test_digest_accepts_bytes():
    assert compute_digest(b'abc123', b'secret') == compute_digest("abc123", "secret")


def test_digest_is_deterministic_lowercase_hex():
    digest = compute_digest("498e4a67", "JBMIAProjectorLink")
    assert digest == compute_digest("498e4a67", "JBMIAProjectorLink")
    assert len(digest) == DIGEST_LENGTH
    assert digest == digest.lower()
    int(digest, 16)


def test_digest_depends_on_salt_and_secret():
    digest = compute_digest("abc123", "secret")
    assert compute_digest("abc124", "secret") != digest
    assert compute_digest("abc123", "secreT") != digest


def test_unencodable_secret_fails_digest():
    # A lone surrogate, as produced by a non-UTF-8 password argument
    with pytest.raises(HashComputationFailedError):
        compute_digest("abc123", "\udc80")


class TestAuthenticator:
    def test_empty_secret_means_no_secret(self):
        auth = Authenticator("")
        assert not auth.has_secret
        assert auth.secret is None

    def test_challenge_without_secret(self):
        auth = Authenticator()
        with pytest.raises(AuthRequiredError):
            auth.challenge("abc123")
        assert not auth.is_active

    def test_sign_before_challenge_is_unchanged(self):
        auth = Authenticator("secret")
        assert not auth.is_active
        assert auth.sign(b'%1POWR 1\r') == b'%1POWR 1\r'

    def test_sign_after_challenge_prefixes_digest(self):
        auth = Authenticator("secret")
        digest = auth.challenge("abc123")
        assert auth.is_active
        assert auth.digest == digest
        assert auth.sign(b'%1POWR 1\r') == digest.encode('ascii') + b'%1POWR 1\r'
        assert auth.sign(b'%1AVMT ?\r') == digest.encode('ascii') + b'%1AVMT ?\r'
