"""
zero_reveal_id/codec.py
Committed-input buffer segmentation, per-proof-type decoding and the
disclosed-field offset tables.

Buffer layout: a concatenation of segments, each starting with a one
byte ProofType tag. A parallel list of segment lengths delimits them.
"""
import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .dates import DATE_LENGTH, parse_ascii_date
from .errors import DecodeError, MalformedBufferError, SegmentNotFoundError

logger = logging.getLogger(__name__)

MRZ_LENGTH = 90
COUNTRY_CODE_LENGTH = 3
MAX_COUNTRIES = 200


class ProofType(IntEnum):
    """Tag byte leading every committed-input segment."""
    DISCLOSE = 0
    AGE = 1
    BIRTHDATE = 2
    EXPIRY_DATE = 3
    NATIONALITY_INCLUSION = 4
    NATIONALITY_EXCLUSION = 5
    ISSUING_COUNTRY_INCLUSION = 6
    ISSUING_COUNTRY_EXCLUSION = 7


DISCLOSE_SEGMENT_LENGTH = 1 + 2 * MRZ_LENGTH  # 181
AGE_SEGMENT_LENGTH = 1 + DATE_LENGTH + 2  # 11
DATE_SEGMENT_LENGTH = 1 + 3 * DATE_LENGTH  # 25
COUNTRY_SEGMENT_LENGTH = 1 + MAX_COUNTRIES * COUNTRY_CODE_LENGTH  # 601

SEGMENT_LENGTHS: Dict[ProofType, int] = {
    ProofType.DISCLOSE: DISCLOSE_SEGMENT_LENGTH,
    ProofType.AGE: AGE_SEGMENT_LENGTH,
    ProofType.BIRTHDATE: DATE_SEGMENT_LENGTH,
    ProofType.EXPIRY_DATE: DATE_SEGMENT_LENGTH,
    ProofType.NATIONALITY_INCLUSION: COUNTRY_SEGMENT_LENGTH,
    ProofType.NATIONALITY_EXCLUSION: COUNTRY_SEGMENT_LENGTH,
    ProofType.ISSUING_COUNTRY_INCLUSION: COUNTRY_SEGMENT_LENGTH,
    ProofType.ISSUING_COUNTRY_EXCLUSION: COUNTRY_SEGMENT_LENGTH,
}

DATE_PROOF_TYPES = (ProofType.BIRTHDATE, ProofType.EXPIRY_DATE)
COUNTRY_PROOF_TYPES = (
    ProofType.NATIONALITY_INCLUSION,
    ProofType.NATIONALITY_EXCLUSION,
    ProofType.ISSUING_COUNTRY_INCLUSION,
    ProofType.ISSUING_COUNTRY_EXCLUSION,
)


class DocumentType(Enum):
    """MRZ layouts of the supported documents."""
    PASSPORT = "passport"  # ICAO TD3, 88 meaningful bytes
    ID_CARD = "id_card"  # ICAO TD1, 90 bytes


# field -> (offset, length) into the 90-byte disclosed bytes
DISCLOSED_FIELD_TABLES: Dict[DocumentType, Dict[str, Tuple[int, int]]] = {
    DocumentType.PASSPORT: {
        "document_type": (0, 2),
        "issuing_country": (2, 3),
        "name": (5, 39),
        "document_number": (44, 9),
        "nationality": (54, 3),
        "birth_date": (57, 6),
        "gender": (64, 1),
        "expiry_date": (65, 6),
    },
    DocumentType.ID_CARD: {
        "document_type": (0, 2),
        "issuing_country": (2, 3),
        "name": (60, 30),
        "document_number": (5, 9),
        "nationality": (45, 3),
        "birth_date": (30, 6),
        "gender": (37, 1),
        "expiry_date": (38, 6),
    },
}


@dataclass(frozen=True)
class Segment:
    """One tagged slice of the committed-input buffer."""
    tag: Optional[int]  # None for an empty segment
    length: int
    data: bytes


@dataclass(frozen=True)
class DiscloseProofInputs:
    mask: bytes
    disclosed_bytes: bytes


@dataclass(frozen=True)
class DateProofInputs:
    current_date: int
    min_date: int
    max_date: int


@dataclass(frozen=True)
class AgeProofInputs:
    current_date: int
    min_age: int
    max_age: int


@dataclass(frozen=True)
class CountryProofInputs:
    country_list: List[str]


@dataclass(frozen=True)
class DisclosedData:
    """Document fields revealed by a disclose proof."""
    name: str
    issuing_country: str
    nationality: str
    gender: str
    birth_date: str
    expiry_date: str
    document_number: str
    document_type: str


# Segmentation

def split_segments(committed_inputs: bytes, segment_lengths: Sequence[int]) -> List[Segment]:
    """Split a committed-input buffer into its tagged segments.

    Args:
        committed_inputs: Concatenated segment bytes
        segment_lengths: Byte length of each segment, in buffer order

    Returns:
        Segments in buffer order

    Raises:
        MalformedBufferError: If a length is negative or the lengths do
            not add up to the buffer length
    """
    committed_inputs = bytes(committed_inputs)
    if any(length < 0 for length in segment_lengths):
        raise MalformedBufferError("segment length cannot be negative")
    if sum(segment_lengths) != len(committed_inputs):
        raise MalformedBufferError(
            f"segment lengths sum to {sum(segment_lengths)}, "
            f"buffer holds {len(committed_inputs)} bytes"
        )

    segments = []
    offset = 0
    for length in segment_lengths:
        data = committed_inputs[offset:offset + length]
        segments.append(Segment(tag=data[0] if data else None, length=length, data=data))
        offset += length
    return segments


def find_segment(committed_inputs: bytes, segment_lengths: Sequence[int],
                 proof_type: ProofType) -> bytes:
    """Return the segment matching a proof type's tag and length.

    Every segment is scanned; when several match, the last one wins.

    Raises:
        MalformedBufferError: If the buffer cannot be segmented
        SegmentNotFoundError: If no segment matches
    """
    proof_type = ProofType(proof_type)
    expected_length = SEGMENT_LENGTHS[proof_type]
    matches = [
        segment.data for segment in split_segments(committed_inputs, segment_lengths)
        if segment.tag == proof_type and segment.length == expected_length
    ]
    if not matches:
        raise SegmentNotFoundError(f"no {proof_type.name} segment in committed inputs")
    if len(matches) > 1:
        logger.warning("%d %s segments found, using the last one", len(matches), proof_type.name)
    return matches[-1]


def _check_segment(data: bytes, proof_type: ProofType) -> bytes:
    data = bytes(data)
    expected_length = SEGMENT_LENGTHS[proof_type]
    if len(data) != expected_length:
        raise DecodeError(
            f"{proof_type.name} segment must be {expected_length} bytes, got {len(data)}"
        )
    if data[0] != proof_type:
        raise DecodeError(f"segment tag {data[0]} is not {proof_type.name}")
    return data


# Decoders

def decode_disclose(segment: bytes) -> DiscloseProofInputs:
    """Decode a DISCLOSE segment: tag || mask(90) || disclosed bytes(90)."""
    data = _check_segment(segment, ProofType.DISCLOSE)
    return DiscloseProofInputs(
        mask=data[1:1 + MRZ_LENGTH],
        disclosed_bytes=data[1 + MRZ_LENGTH:DISCLOSE_SEGMENT_LENGTH],
    )


def decode_date(segment: bytes, proof_type: ProofType) -> DateProofInputs:
    """Decode a BIRTHDATE or EXPIRY_DATE segment: tag || 3 x 8-byte dates."""
    proof_type = ProofType(proof_type)
    if proof_type not in DATE_PROOF_TYPES:
        raise ValueError(f"{proof_type!r} is not a date proof type")
    data = _check_segment(segment, proof_type)
    return DateProofInputs(
        current_date=parse_ascii_date(data[1:9]),
        min_date=parse_ascii_date(data[9:17]),
        max_date=parse_ascii_date(data[17:25]),
    )


def decode_age(segment: bytes) -> AgeProofInputs:
    """Decode an AGE segment: tag || current date(8) || min age || max age."""
    data = _check_segment(segment, ProofType.AGE)
    return AgeProofInputs(
        current_date=parse_ascii_date(data[1:9]),
        min_age=data[9],
        max_age=data[10],
    )


def decode_country_list(segment: bytes, proof_type: ProofType) -> CountryProofInputs:
    """Decode a country segment: tag || 200 x 3-byte codes, zero padded.

    Reading stops at the first code starting with a zero byte.
    """
    proof_type = ProofType(proof_type)
    if proof_type not in COUNTRY_PROOF_TYPES:
        raise ValueError(f"{proof_type!r} is not a country proof type")
    data = _check_segment(segment, proof_type)
    countries = []
    for start in range(1, COUNTRY_SEGMENT_LENGTH, COUNTRY_CODE_LENGTH):
        code = data[start:start + COUNTRY_CODE_LENGTH]
        if code[0] == 0:
            break
        countries.append(code.decode('ascii', errors='replace'))
    return CountryProofInputs(country_list=countries)


def decode_disclosed_fields(disclosed_bytes: bytes, document_type: DocumentType) -> DisclosedData:
    """Slice the named MRZ fields out of the 90 disclosed bytes.

    Undisclosed positions are zero bytes and come back as NUL characters.
    """
    disclosed_bytes = bytes(disclosed_bytes)
    if len(disclosed_bytes) != MRZ_LENGTH:
        raise DecodeError(f"disclosed bytes must be {MRZ_LENGTH} bytes, got {len(disclosed_bytes)}")
    table = DISCLOSED_FIELD_TABLES[document_type]
    fields = {
        name: disclosed_bytes[offset:offset + length].decode('ascii', errors='replace')
        for name, (offset, length) in table.items()
    }
    return DisclosedData(**fields)


# Encoders

def encode_disclose_segment(mask: bytes, disclosed_bytes: bytes) -> bytes:
    if len(mask) != MRZ_LENGTH or len(disclosed_bytes) != MRZ_LENGTH:
        raise ValueError(f"mask and disclosed bytes must be {MRZ_LENGTH} bytes each")
    return bytes([ProofType.DISCLOSE]) + bytes(mask) + bytes(disclosed_bytes)


def encode_age_segment(current_date: bytes, min_age: int, max_age: int) -> bytes:
    if len(current_date) != DATE_LENGTH:
        raise ValueError(f"current date must be {DATE_LENGTH} bytes")
    if not (0 <= min_age <= 0xFF and 0 <= max_age <= 0xFF):
        raise ValueError("ages must fit in one byte")
    return bytes([ProofType.AGE]) + bytes(current_date) + bytes([min_age, max_age])


def encode_date_segment(proof_type: ProofType, current_date: bytes,
                        min_date: bytes, max_date: bytes) -> bytes:
    if proof_type not in DATE_PROOF_TYPES:
        raise ValueError(f"{proof_type!r} is not a date proof type")
    dates = (current_date, min_date, max_date)
    if any(len(value) != DATE_LENGTH for value in dates):
        raise ValueError(f"dates must be {DATE_LENGTH} bytes each")
    return bytes([proof_type]) + b''.join(bytes(value) for value in dates)


def encode_country_segment(proof_type: ProofType, countries: Sequence[str]) -> bytes:
    if proof_type not in COUNTRY_PROOF_TYPES:
        raise ValueError(f"{proof_type!r} is not a country proof type")
    if len(countries) > MAX_COUNTRIES:
        raise ValueError(f"at most {MAX_COUNTRIES} countries allowed")
    body = b''
    for code in countries:
        raw = code.encode('ascii')
        if len(raw) != COUNTRY_CODE_LENGTH or raw[0] == 0:
            raise ValueError(f"invalid country code: {code!r}")
        body += raw
    body += b'\x00' * (COUNTRY_SEGMENT_LENGTH - 1 - len(body))
    return bytes([proof_type]) + body


def concat_segments(segments: Iterable[bytes]) -> Tuple[bytes, List[int]]:
    """Join segments into a committed-input buffer and its length list."""
    segments = [bytes(segment) for segment in segments]
    return b''.join(segments), [len(segment) for segment in segments]
