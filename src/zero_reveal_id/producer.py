"""
zero_reveal_id/producer.py
Producer-side contract: what a proof generator computes so that the
verifier accepts its output bit for bit.

The data group is DG1 of the document chip: a 5-byte ASN.1 header
followed by the 90-byte MRZ (TD3 passports use 88 and pad with zeros).
"""
from typing import Iterable, List, Optional, Sequence

from .codec import (
    DISCLOSED_FIELD_TABLES,
    MRZ_LENGTH,
    DocumentType,
    encode_disclose_segment,
)
from .crypto import commitment_of, field_to_bytes
from .dates import DATE_LENGTH
from .public_inputs import AGGREGATION_TAIL_SIZE
from .scope import bind_scope

DATA_GROUP_LENGTH = 95
MRZ_OFFSET = DATA_GROUP_LENGTH - MRZ_LENGTH

# Domain separation tags
INBOUND_COMMITMENT_TAG = b'zero-reveal-id/inbound/v1'
NULLIFIER_TAG = b'zero-reveal-id/nullifier/v1'
SCOPED_NULLIFIER_TAG = b'zero-reveal-id/scoped-nullifier/v1'


def mask_for_fields(field_names: Iterable[str], document_type: DocumentType) -> bytes:
    """Build a 90-byte disclose mask revealing the named fields.

    Raises:
        ValueError: If a field name is not in the document's table
    """
    table = DISCLOSED_FIELD_TABLES[document_type]
    mask = bytearray(MRZ_LENGTH)
    for name in field_names:
        if name not in table:
            raise ValueError(f"Unknown field for {document_type.value}: {name}")
        offset, length = table[name]
        mask[offset:offset + length] = b'\x01' * length
    return bytes(mask)


def apply_disclosure_mask(data_group: bytes, mask: bytes) -> bytes:
    """Zero out every MRZ byte whose mask byte is 0.

    Args:
        data_group: Raw 95-byte DG1
        mask: 90 bytes, each 0 (hide) or 1 (disclose)

    Returns:
        90 disclosed bytes
    """
    if len(data_group) != DATA_GROUP_LENGTH:
        raise ValueError(f"data group must be {DATA_GROUP_LENGTH} bytes, got {len(data_group)}")
    if len(mask) != MRZ_LENGTH:
        raise ValueError(f"mask must be {MRZ_LENGTH} bytes, got {len(mask)}")
    if any(bit not in (0, 1) for bit in mask):
        raise ValueError("mask bytes must be 0 or 1")
    mrz = bytes(data_group)[MRZ_OFFSET:]
    return bytes(byte * bit for byte, bit in zip(mrz, mask))


def compute_param_commitment(segment: bytes) -> int:
    """Commitment over a full tagged segment, as the verifier recomputes it."""
    return commitment_of(bytes(segment))


def compute_disclose_commitment(mask: bytes, disclosed_bytes: bytes) -> int:
    """Commitment of a disclose proof.

    The DISCLOSE tag is prepended before hashing so the committed
    material is the same 181 bytes the verifier receives.
    """
    return compute_param_commitment(encode_disclose_segment(mask, disclosed_bytes))


def compute_inbound_commitment(salt: bytes, data_group: bytes, private_secret: bytes) -> int:
    """Running commitment handed from the document-integrity proof."""
    return commitment_of(INBOUND_COMMITMENT_TAG + bytes(salt) + bytes(data_group)
                         + bytes(private_secret))


def derive_scoped_nullifier(
    inbound_commitment: int,
    salt: bytes,
    data_group: bytes,
    private_secret: bytes,
    scope: str = "",
    subscope: str = "",
) -> int:
    """Derive the nullifier for one (scope, subscope) pair.

    Stable for a fixed document, secret and scope pair; unlinkable
    across scope pairs without the secret.

    Raises:
        ValueError: If the inbound commitment does not open to the
            given salt, data group and secret
    """
    if compute_inbound_commitment(salt, data_group, private_secret) != inbound_commitment:
        raise ValueError("inbound commitment does not match the private inputs")
    base = commitment_of(NULLIFIER_TAG + bytes(data_group) + bytes(private_secret))
    scope_commitment, subscope_commitment = bind_scope(scope, subscope)
    return commitment_of(
        SCOPED_NULLIFIER_TAG
        + field_to_bytes(base)
        + field_to_bytes(scope_commitment)
        + field_to_bytes(subscope_commitment)
    )


def build_public_inputs(
    certificate_root: int,
    current_date: bytes,
    segments: Sequence[bytes],
    nullifier: int,
    scope: str = "",
    subscope: str = "",
    aggregation_tail: Optional[Sequence[int]] = None,
) -> List[int]:
    """Assemble a public-input vector in the fixed layout.

    Args:
        certificate_root: Certificate registry root the proof used
        current_date: 8 ASCII bytes, YYYYMMDD
        segments: Committed-input segments, in buffer order
        nullifier: Scoped nullifier
        scope: Service scope ("" for none)
        subscope: Service subscope ("" for none)
        aggregation_tail: 16 opaque elements, zeros by default
    """
    if len(current_date) != DATE_LENGTH:
        raise ValueError(f"current date must be {DATE_LENGTH} bytes")
    if aggregation_tail is None:
        aggregation_tail = [0] * AGGREGATION_TAIL_SIZE
    if len(aggregation_tail) != AGGREGATION_TAIL_SIZE:
        raise ValueError(f"aggregation tail must hold {AGGREGATION_TAIL_SIZE} elements")
    scope_commitment, subscope_commitment = bind_scope(scope, subscope)
    return (
        [certificate_root]
        + list(bytes(current_date))
        + [scope_commitment, subscope_commitment]
        + [compute_param_commitment(segment) for segment in segments]
        + [nullifier]
        + list(aggregation_tail)
    )
