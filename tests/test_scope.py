"""
tests/test_scope.py
Unit tests for scope binding.
"""
from zero_reveal_id.crypto import commitment_of
from zero_reveal_id.scope import bind_scope, verify_scopes


class TestBindScope:
    """Tests for scope commitment derivation."""

    def test_empty_scopes_are_zero(self):
        assert bind_scope("", "") == (0, 0)

    def test_scope_only(self):
        scope, subscope = bind_scope("acme", "")
        assert scope != 0
        assert subscope == 0

    def test_stable(self):
        """Same strings should always bind to the same commitments."""
        assert bind_scope("acme", "login") == bind_scope("acme", "login")

    def test_utf8_commitment(self):
        scope, _ = bind_scope("zürich.example", "")
        assert scope == commitment_of("zürich.example".encode('utf-8'))

    def test_scopes_distinct(self):
        assert bind_scope("acme", "")[0] != bind_scope("acme2", "")[0]


class TestVerifyScopes:
    """Tests for checking public input scope slots."""

    def test_matching(self):
        scope, subscope = bind_scope("acme", "login")
        assert verify_scopes(scope, subscope, "acme", "login") is True

    def test_wrong_subscope(self):
        scope, subscope = bind_scope("acme", "login")
        assert verify_scopes(scope, subscope, "acme", "signup") is False

    def test_unbound_proof_requires_empty_scope(self):
        assert verify_scopes(0, 0, "", "") is True
        assert verify_scopes(0, 0, "acme", "") is False
