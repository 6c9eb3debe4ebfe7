"""
zero_reveal_id/qr.py
QR payloads carrying a verifier's proof request to the document holder.
"""
import json
from dataclasses import dataclass, field
from typing import List

from .codec import ProofType


@dataclass
class ProofRequestQRData:
    """Verification context the holder binds a proof to."""
    scope: str  # usually the verifier's domain
    subscope: str
    validity_period_in_days: int
    proof_types: List[ProofType] = field(default_factory=list)
    schema_version: str = "1.0.0"


def encode_request_payload(qr_data: ProofRequestQRData) -> str:
    """Compact JSON for QR capacity."""
    payload = {
        "d": qr_data.scope,
        "s": qr_data.subscope,
        "vp": qr_data.validity_period_in_days,
        "pt": [ProofType(t).name for t in qr_data.proof_types],
        "sv": qr_data.schema_version,
    }
    return json.dumps(payload, separators=(',', ':'))


def generate_request_qr(
    qr_data: ProofRequestQRData,
    output_path: str,
    error_correction: str = 'M'
) -> None:
    """Render a proof request as a QR code image.

    Args:
        qr_data: ProofRequestQRData to encode
        output_path: Path to save QR image (PNG)
        error_correction: L(7%), M(15%), Q(25%), H(30%)
            Falls back to L if generation fails at the requested level.

    Raises:
        ImportError: If qrcode library not installed
    """
    try:
        import qrcode
    except ImportError:
        raise ImportError("Install qrcode library: pip install \"zero-reveal-id[qr]\"")

    data = encode_request_payload(qr_data)

    ec_map = {
        'L': qrcode.constants.ERROR_CORRECT_L,
        'M': qrcode.constants.ERROR_CORRECT_M,
        'Q': qrcode.constants.ERROR_CORRECT_Q,
        'H': qrcode.constants.ERROR_CORRECT_H,
    }

    error_correction = (error_correction or 'M').upper()

    def build_qr(ec_level: str):
        qr = qrcode.QRCode(
            version=None,  # Auto-detect
            error_correction=ec_map.get(ec_level, qrcode.constants.ERROR_CORRECT_M),
            box_size=10,
            border=4
        )
        qr.add_data(data)
        qr.make(fit=True)
        return qr

    try:
        qr = build_qr(error_correction)
    except Exception as exc:
        if error_correction == 'L':
            raise
        try:
            qr = build_qr('L')
        except Exception as exc2:
            raise exc2 from exc

    img = qr.make_image(fill_color="black", back_color="white")
    img.save(output_path)


def parse_request_qr(qr_content: str) -> ProofRequestQRData:
    """Parse scanned QR content into a proof request.

    Raises:
        ValueError: On malformed JSON or unknown proof type names
        KeyError: If a required key is missing
    """
    payload = json.loads(qr_content)

    try:
        proof_types = [ProofType[name] for name in payload.get('pt', [])]
    except KeyError as exc:
        raise ValueError(f"Unknown proof type: {exc}") from exc

    return ProofRequestQRData(
        scope=payload['d'],
        subscope=payload.get('s', ''),
        validity_period_in_days=int(payload['vp']),
        proof_types=proof_types,
        schema_version=payload.get('sv', '1.0.0')
    )
