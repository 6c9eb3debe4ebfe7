"""
examples/complete_workflow.py
End-to-end example: Request -> Disclose -> Commit -> Verify -> Inspect
Requires the crypto extra: pip install "zero-reveal-id[crypto]"
"""
import sys
import os
from datetime import datetime, timezone

# Add src to path for development
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from zero_reveal_id import (
    DocumentType,
    Ed25519ProofVerifier,
    IDProofVerifier,
    ProofRequestQRData,
    ProofType,
    TrustRegistry,
    apply_disclosure_mask,
    build_public_inputs,
    compute_inbound_commitment,
    concat_segments,
    derive_scoped_nullifier,
    generate_salt,
    get_age_proof_inputs,
    get_disclose_proof_inputs,
    get_disclosed_data,
    mask_for_fields,
    parse_request_qr,
)
from zero_reveal_id.codec import encode_age_segment, encode_disclose_segment
from zero_reveal_id.dates import format_ascii_date
from zero_reveal_id.qr import encode_request_payload
from zero_reveal_id.verifiers import public_key_for, sign_public_inputs

# ============================================================
# STEP 1: OPERATOR - Set up the trust registry
# ============================================================

PROVER_KEY = bytes(range(32))  # stands in for the proof system
VKEY_ID = bytes.fromhex("5a" * 32)
CERTIFICATE_ROOT = 0x2F1E3D4C

registry, admin = TrustRegistry.create("ops")
registry.register_verifier(admin, VKEY_ID, Ed25519ProofVerifier(public_key_for(PROVER_KEY)))
registry.add_trusted_root(admin, CERTIFICATE_ROOT)

print("=" * 60)
print("ZERO-REVEAL-ID: Identity Document Proof Verification")
print("=" * 60)
print(f"✓ Verifier registered for vkey {VKEY_ID.hex()[:16]}...")
print(f"✓ Trusted certificate root {CERTIFICATE_ROOT:#x}")

# ============================================================
# STEP 2: VERIFIER - Publish a proof request
# ============================================================

request = ProofRequestQRData(
    scope="bank.example",
    subscope="account-opening",
    validity_period_in_days=7,
    proof_types=[ProofType.DISCLOSE, ProofType.AGE],
)
qr_content = encode_request_payload(request)

# Uncomment to render the QR code (requires qrcode[pil]):
# from zero_reveal_id import generate_request_qr
# generate_request_qr(request, "proof_request_qr.png")
print(f"✓ Proof request payload: {qr_content}")

# ============================================================
# STEP 3: HOLDER - Build committed inputs from the document
# ============================================================

received = parse_request_qr(qr_content)
data_group = b"\x61\x5b\x5f\x1f\x58" + (
    "P<UTOERIKSSON<<ANNA<MARIA".ljust(44, "<")
    + "L898902C36UTO7408122F1204159ZE184226B<<<<<10"
).encode('ascii') + b"\x00\x00"
today = format_ascii_date(datetime.now(timezone.utc))

mask = mask_for_fields(["nationality", "document_type"], DocumentType.PASSPORT)
disclosed = apply_disclosure_mask(data_group, mask)
segments = [
    encode_disclose_segment(mask, disclosed),
    encode_age_segment(today, 18, 0),
]
committed_inputs, segment_lengths = concat_segments(segments)

salt, secret = generate_salt(), b"\x42" * 32
inbound = compute_inbound_commitment(salt, data_group, secret)
nullifier = derive_scoped_nullifier(inbound, salt, data_group, secret,
                                    received.scope, received.subscope)

public_inputs = build_public_inputs(CERTIFICATE_ROOT, today, segments, nullifier,
                                    scope=received.scope, subscope=received.subscope)
proof = sign_public_inputs(PROVER_KEY, public_inputs)

print()
print("-" * 60)
print("HOLDER PROOF")
print("-" * 60)
print(f"✓ Segments committed: {segment_lengths}")
print(f"✓ Public inputs: {len(public_inputs)} field elements")

# ============================================================
# STEP 4: VERIFIER - Verify the proof
# ============================================================

verifier = IDProofVerifier(registry)
result = verifier.verify_proof(
    VKEY_ID, proof, public_inputs, committed_inputs, segment_lengths,
    validity_period_in_days=request.validity_period_in_days,
    scope=request.scope, subscope=request.subscope,
)

print()
print("-" * 60)
print("VERIFICATION")
print("-" * 60)
print(f"✓ Verified: {result.verified}")
print(f"✓ Nullifier: {hex(result.nullifier)[:18]}...")

# ============================================================
# STEP 5: VERIFIER - Read what was proven
# ============================================================

disclose = get_disclose_proof_inputs(committed_inputs, segment_lengths)
fields = get_disclosed_data(disclose.disclosed_bytes, is_id_card=False)
age = get_age_proof_inputs(committed_inputs, segment_lengths)

print(f"✓ Nationality: {fields.nationality}")
print(f"✓ Document type: {fields.document_type}")
print(f"✓ Age at least: {age.min_age}")

print()
print("=" * 60)
print("COMPLETE WORKFLOW SUCCESSFUL")
print("=" * 60)
