"""Tests for credential precedence."""

from __future__ import annotations

from modules.github_mcp.credentials import CredentialResolver


def test_request_credential_wins_over_fallback():
    assert CredentialResolver("fallback").resolve("request") == "request"


def test_fallback_used_when_request_credential_missing():
    resolver = CredentialResolver("fallback")
    assert resolver.resolve(None) == "fallback"
    assert resolver.resolve("") == "fallback"
    assert resolver.resolve("   ") == "fallback"


def test_none_when_nothing_configured():
    assert CredentialResolver().resolve(None) is None
    assert CredentialResolver("").resolve("") is None


def test_values_are_stripped():
    assert CredentialResolver(" fb ").resolve(None) == "fb"
    assert CredentialResolver().resolve(" tok\n") == "tok"
