"""
zero_reveal_id/crypto.py
Digest and field-element primitives shared by producer and verifier.
"""
import hashlib
import hmac
import secrets
from typing import Union

# BN254 scalar field modulus - every public input must be below it
SCALAR_FIELD_MODULUS = (
    21888242871839275222246405745257275088548364400416034343698204186575808495617
)
FIELD_ELEMENT_BYTES = 32
SALT_LENGTH = 32
HASH_ALGORITHM = 'sha256'

FieldLike = Union[int, bytes, str]


def generate_salt() -> bytes:
    """Generate a 256-bit random salt for the inbound commitment.

    Uses the secrets module (OS CSPRNG).

    Returns:
        32 bytes of cryptographically random data
    """
    return secrets.token_bytes(SALT_LENGTH)


def digest(data: bytes) -> bytes:
    """SHA-256 of raw bytes."""
    return hashlib.sha256(data).digest()


def commitment_of(data: bytes) -> int:
    """Compute the parameter commitment of a byte string.

    Format: int(SHA256(data)[1:]) big-endian

    The most-significant byte of the digest is dropped so the
    remaining 248 bits always fit the scalar field. Producer and
    verifier must hash identical bytes, tag included.

    Args:
        data: Raw bytes of a committed segment (or any payload)

    Returns:
        Field element as a non-negative int below 2**248
    """
    return int.from_bytes(digest(data)[1:], 'big')


def field_to_bytes(value: int) -> bytes:
    """Encode a field element as 32 bytes big-endian."""
    return value.to_bytes(FIELD_ELEMENT_BYTES, 'big')


def to_field_element(value: FieldLike) -> int:
    """Normalize a field element given as int, 32-byte bytes or hex string.

    Raises:
        ValueError: If the value is negative, oversized or not below the
            scalar field modulus
        TypeError: If the value has an unsupported type
    """
    if isinstance(value, bool):
        raise TypeError("field element must be int, bytes or hex string")
    if isinstance(value, int):
        result = value
    elif isinstance(value, (bytes, bytearray)):
        if len(value) > FIELD_ELEMENT_BYTES:
            raise ValueError(f"field element longer than {FIELD_ELEMENT_BYTES} bytes")
        result = int.from_bytes(bytes(value), 'big')
    elif isinstance(value, str):
        text = value[2:] if value[:2].lower() == '0x' else value
        if not text:
            raise ValueError("empty hex string")
        result = int(text, 16)
    else:
        raise TypeError("field element must be int, bytes or hex string")

    if result < 0 or result >= SCALAR_FIELD_MODULUS:
        raise ValueError("field element out of range")
    return result


def constant_time_compare(a: bytes, b: bytes) -> bool:
    """Compare two byte strings in constant time.

    Always use this for commitment and scope comparisons.
    """
    return hmac.compare_digest(a, b)


def field_equals(a: int, b: int) -> bool:
    """Constant-time equality of two field elements."""
    return constant_time_compare(field_to_bytes(a), field_to_bytes(b))
