"""
tests/test_registry.py
Unit tests for the trust registry.
"""
import pytest
from zero_reveal_id.errors import (
    RegistryPausedError,
    UnauthorizedError,
    VerifierNotFoundError,
)
from zero_reveal_id.registry import AdminCapability, PauseScope, TrustRegistry

VKEY_ID = b"\x11" * 32


class StubVerifier:
    def __init__(self, result=True):
        self.result = result

    def verify(self, proof, public_inputs):
        return self.result


@pytest.fixture
def registry_and_admin():
    return TrustRegistry.create("ops")


@pytest.fixture
def events(registry_and_admin):
    registry, _ = registry_and_admin
    collected = []
    registry.add_listener(collected.append)
    return collected


class TestTrustedRoots:
    """Tests for trusted root management."""

    def test_add_then_remove(self, registry_and_admin):
        registry, admin = registry_and_admin
        registry.add_trusted_root(admin, 0x1234)
        assert registry.is_trusted_root(0x1234) is True
        registry.remove_trusted_root(admin, 0x1234)
        assert registry.is_trusted_root(0x1234) is False

    def test_root_forms_normalized(self, registry_and_admin):
        """A root added as hex is found as int or bytes."""
        registry, admin = registry_and_admin
        registry.add_trusted_root(admin, "0x1234")
        assert registry.is_trusted_root(0x1234) is True
        assert registry.is_trusted_root(b"\x12\x34") is True

    def test_idempotent(self, registry_and_admin):
        registry, admin = registry_and_admin
        registry.add_trusted_root(admin, 1)
        registry.add_trusted_root(admin, 1)
        registry.remove_trusted_root(admin, 1)
        registry.remove_trusted_root(admin, 1)
        assert registry.is_trusted_root(1) is False

    def test_invalid_root_not_trusted(self, registry_and_admin):
        registry, _ = registry_and_admin
        assert registry.is_trusted_root(-5) is False


class TestVerifiers:
    """Tests for verifier registration and lookup."""

    def test_register_and_lookup(self, registry_and_admin):
        registry, admin = registry_and_admin
        handle = StubVerifier()
        registry.register_verifier(admin, VKEY_ID, handle)
        assert registry.lookup(VKEY_ID) is handle
        assert registry.lookup(VKEY_ID.hex()) is handle
        assert registry.has_verifier("0x" + VKEY_ID.hex()) is True

    def test_register_twice_overwrites(self, registry_and_admin):
        registry, admin = registry_and_admin
        first, second = StubVerifier(), StubVerifier(False)
        registry.register_verifier(admin, VKEY_ID, first)
        registry.register_verifier(admin, VKEY_ID, second)
        assert registry.lookup(VKEY_ID) is second

    def test_lookup_missing(self, registry_and_admin):
        registry, _ = registry_and_admin
        with pytest.raises(VerifierNotFoundError):
            registry.lookup(VKEY_ID)

    def test_lookup_malformed_id(self, registry_and_admin):
        registry, _ = registry_and_admin
        with pytest.raises(VerifierNotFoundError):
            registry.lookup(b"\x11" * 31)
        assert registry.has_verifier("zz") is False

    def test_register_malformed_id(self, registry_and_admin):
        registry, admin = registry_and_admin
        with pytest.raises(ValueError):
            registry.register_verifier(admin, b"short", StubVerifier())

    def test_remove(self, registry_and_admin):
        registry, admin = registry_and_admin
        registry.register_verifier(admin, VKEY_ID, StubVerifier())
        registry.remove_verifier(admin, VKEY_ID)
        registry.remove_verifier(admin, VKEY_ID)
        assert registry.has_verifier(VKEY_ID) is False


class TestAuthorization:
    """Tests for admin-only mutations."""

    def test_foreign_capability_rejected(self, registry_and_admin):
        registry, _ = registry_and_admin
        impostor = AdminCapability(principal="ops")
        with pytest.raises(UnauthorizedError):
            registry.add_trusted_root(impostor, 1)
        with pytest.raises(UnauthorizedError):
            registry.register_verifier(impostor, VKEY_ID, StubVerifier())
        with pytest.raises(UnauthorizedError):
            registry.pause(impostor)

    def test_non_capability_rejected(self, registry_and_admin):
        registry, _ = registry_and_admin
        with pytest.raises(UnauthorizedError):
            registry.add_trusted_root("ops", 1)

    def test_transfer_admin(self, registry_and_admin, events):
        registry, admin = registry_and_admin
        new_admin = registry.transfer_admin(admin, "security")
        assert registry.admin == "security"
        with pytest.raises(UnauthorizedError):
            registry.add_trusted_root(admin, 1)
        registry.add_trusted_root(new_admin, 1)
        assert registry.is_trusted_root(1) is True

        transfer = [e for e in events if e.action == "transfer_admin"][0]
        assert transfer.actor == "ops"
        assert transfer.new_admin == "security"

    def test_audit_events(self, registry_and_admin, events):
        registry, admin = registry_and_admin
        registry.register_verifier(admin, VKEY_ID, StubVerifier())
        registry.add_trusted_root(admin, 0xAB)
        assert [e.action for e in events] == ["add_verifier", "add_root"]
        assert events[0].subject == VKEY_ID.hex()
        assert events[1].subject == "0xab"


class TestPause:
    """Tests for pausing registry mutations."""

    def test_pause_blocks_mutations(self, registry_and_admin):
        registry, admin = registry_and_admin
        registry.pause(admin)
        for scope in PauseScope:
            assert registry.is_paused(scope) is True
        with pytest.raises(RegistryPausedError):
            registry.add_trusted_root(admin, 1)
        with pytest.raises(RegistryPausedError):
            registry.register_verifier(admin, VKEY_ID, StubVerifier())

    def test_pause_leaves_reads_working(self, registry_and_admin):
        registry, admin = registry_and_admin
        handle = StubVerifier()
        registry.register_verifier(admin, VKEY_ID, handle)
        registry.add_trusted_root(admin, 7)
        registry.pause(admin)
        assert registry.lookup(VKEY_ID) is handle
        assert registry.is_trusted_root(7) is True

    def test_partial_pause(self, registry_and_admin):
        registry, admin = registry_and_admin
        registry.add_trusted_root(admin, 7)
        registry.pause(admin, [PauseScope.REMOVE_ROOT])
        registry.add_trusted_root(admin, 8)
        with pytest.raises(RegistryPausedError):
            registry.remove_trusted_root(admin, 7)

    def test_unpause(self, registry_and_admin):
        registry, admin = registry_and_admin
        registry.pause(admin)
        registry.unpause(admin)
        registry.add_trusted_root(admin, 1)
        assert registry.is_trusted_root(1) is True
