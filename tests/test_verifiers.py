"""
tests/test_verifiers.py
Tests for the Ed25519 reference verifier.
"""
import pytest

pytest.importorskip("cryptography")

from zero_reveal_id.verifiers import (  # noqa: E402
    Ed25519ProofVerifier,
    encode_public_inputs,
    public_key_for,
    sign_public_inputs,
)

PRIVATE_KEY = bytes(range(32))


@pytest.fixture
def public_inputs():
    return [0x1234] + list(b"20250601") + [0] * 18


@pytest.fixture
def verifier():
    return Ed25519ProofVerifier(public_key=public_key_for(PRIVATE_KEY))


class TestEncodePublicInputs:
    """Tests for the canonical input encoding."""

    def test_fixed_width(self):
        encoded = encode_public_inputs([1, 2])
        assert len(encoded) == 64
        assert encoded[31] == 1
        assert encoded[63] == 2


class TestEd25519ProofVerifier:
    """Tests for attestation-based verification."""

    def test_valid_signature(self, verifier, public_inputs):
        proof = sign_public_inputs(PRIVATE_KEY, public_inputs)
        assert verifier.verify(proof, public_inputs) is True

    def test_tampered_inputs(self, verifier, public_inputs):
        proof = sign_public_inputs(PRIVATE_KEY, public_inputs)
        public_inputs[0] += 1
        assert verifier.verify(proof, public_inputs) is False

    def test_garbage_proof(self, verifier, public_inputs):
        assert verifier.verify(b"\x00" * 10, public_inputs) is False

    def test_wrong_key(self, public_inputs):
        proof = sign_public_inputs(PRIVATE_KEY, public_inputs)
        other = Ed25519ProofVerifier(public_key=public_key_for(b"\x09" * 32))
        assert other.verify(proof, public_inputs) is False

    def test_hex_key(self, public_inputs):
        proof = sign_public_inputs(PRIVATE_KEY.hex(), public_inputs)
        verifier = Ed25519ProofVerifier(public_key=public_key_for(PRIVATE_KEY).hex())
        assert verifier.verify(proof, public_inputs) is True
