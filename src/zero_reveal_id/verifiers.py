"""
zero_reveal_id/verifiers.py
Verifier handles: the opaque verify(proof, public_inputs) capability.
"""
from dataclasses import dataclass
from typing import Protocol, Sequence, Union

from .crypto import field_to_bytes


class VerifierHandle(Protocol):
    """Proof-system verifier bound to one verification key."""

    def verify(self, proof: bytes, public_inputs: Sequence[int]) -> bool:
        ...


def encode_public_inputs(public_inputs: Sequence[int]) -> bytes:
    """Canonical encoding: each element as 32 bytes big-endian, concatenated."""
    return b''.join(field_to_bytes(value) for value in public_inputs)


def _normalize_key(key: Union[bytes, str]) -> bytes:
    """Accept raw key bytes or a hex-encoded string."""
    if isinstance(key, bytes):
        return key
    if isinstance(key, str):
        return bytes.fromhex(key)
    raise TypeError("key must be bytes or hex string")


def _ed25519():
    try:
        from cryptography.hazmat.primitives.asymmetric import ed25519
    except ImportError as exc:
        raise ImportError(
            "Install cryptography for Ed25519 verifiers: "
            "pip install \"zero-reveal-id[crypto]\""
        ) from exc
    return ed25519


@dataclass(frozen=True)
class Ed25519ProofVerifier:
    """Reference verifier accepting proofs attested by an Ed25519 key.

    The proof is a signature over the canonical encoding of the full
    public-input vector. Used for development and tests in place of
    a proof-system backend.
    """
    public_key: bytes

    def __post_init__(self):
        object.__setattr__(self, 'public_key', _normalize_key(self.public_key))

    def verify(self, proof: bytes, public_inputs: Sequence[int]) -> bool:
        ed25519 = _ed25519()
        try:
            key = ed25519.Ed25519PublicKey.from_public_bytes(self.public_key)
            key.verify(bytes(proof), encode_public_inputs(public_inputs))
            return True
        except Exception:
            return False


def sign_public_inputs(private_key: Union[bytes, str], public_inputs: Sequence[int]) -> bytes:
    """Produce an Ed25519 attestation for Ed25519ProofVerifier.

    Args:
        private_key: 32-byte raw Ed25519 private key (bytes or hex)
        public_inputs: Full public-input vector, aggregation tail included

    Returns:
        64-byte signature usable as the proof
    """
    ed25519 = _ed25519()
    key = ed25519.Ed25519PrivateKey.from_private_bytes(_normalize_key(private_key))
    return key.sign(encode_public_inputs(public_inputs))


def public_key_for(private_key: Union[bytes, str]) -> bytes:
    """Raw 32-byte public key of an Ed25519 private key."""
    ed25519 = _ed25519()
    from cryptography.hazmat.primitives import serialization

    key = ed25519.Ed25519PrivateKey.from_private_bytes(_normalize_key(private_key))
    return key.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )
