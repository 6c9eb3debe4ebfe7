"""
Zero-Reveal-ID: Verification of zero-knowledge identity document proofs.

This library checks proofs about passports and ID cards (field disclosure,
age and date bounds, country membership) against their committed inputs,
a trusted certificate root, a freshness window and a verifier scope,
without ever seeing the document itself.
"""

from .crypto import (
    generate_salt,
    commitment_of,
    to_field_element,
    constant_time_compare,
    SCALAR_FIELD_MODULUS,
)

from .errors import (
    ZeroRevealIDError,
    VerificationError,
    VerifierNotFoundError,
    MalformedPublicInputsError,
    UntrustedRootError,
    ExpiredOrInvalidDateError,
    ScopeMismatchError,
    InvalidCommitmentError,
    DecodeError,
    MalformedBufferError,
    SegmentNotFoundError,
    InvalidDateError,
    RegistryError,
    UnauthorizedError,
    RegistryPausedError,
)

from .codec import (
    ProofType,
    DocumentType,
    Segment,
    DiscloseProofInputs,
    DateProofInputs,
    AgeProofInputs,
    CountryProofInputs,
    DisclosedData,
    split_segments,
    decode_disclose,
    decode_date,
    decode_age,
    decode_country_list,
    decode_disclosed_fields,
    concat_segments,
)

from .dates import (
    parse_ascii_date,
    is_current_date_valid,
)

from .scope import (
    bind_scope,
    verify_scopes,
)

from .public_inputs import (
    PublicInputs,
    AGGREGATION_TAIL_SIZE,
)

from .registry import (
    AdminCapability,
    AuditEvent,
    PauseScope,
    TrustRegistry,
)

from .verifiers import (
    VerifierHandle,
    Ed25519ProofVerifier,
)

from .verify import (
    VerificationResult,
    IDProofVerifier,
    verify_committed_inputs,
    get_disclosed_data,
    get_disclose_proof_inputs,
    get_date_proof_inputs,
    get_age_proof_inputs,
    get_country_proof_inputs,
)

from .producer import (
    mask_for_fields,
    apply_disclosure_mask,
    compute_param_commitment,
    compute_disclose_commitment,
    compute_inbound_commitment,
    derive_scoped_nullifier,
    build_public_inputs,
)

from .qr import (
    ProofRequestQRData,
    generate_request_qr,
    parse_request_qr,
)

from .config import (
    VerifierSettings,
    configure_logging,
    load_registry_file,
    registry_from_settings,
)

__version__ = "0.1.0"

__all__ = [
    # Crypto
    "generate_salt",
    "commitment_of",
    "to_field_element",
    "constant_time_compare",
    "SCALAR_FIELD_MODULUS",
    # Errors
    "ZeroRevealIDError",
    "VerificationError",
    "VerifierNotFoundError",
    "MalformedPublicInputsError",
    "UntrustedRootError",
    "ExpiredOrInvalidDateError",
    "ScopeMismatchError",
    "InvalidCommitmentError",
    "DecodeError",
    "MalformedBufferError",
    "SegmentNotFoundError",
    "InvalidDateError",
    "RegistryError",
    "UnauthorizedError",
    "RegistryPausedError",
    # Codec
    "ProofType",
    "DocumentType",
    "Segment",
    "DiscloseProofInputs",
    "DateProofInputs",
    "AgeProofInputs",
    "CountryProofInputs",
    "DisclosedData",
    "split_segments",
    "decode_disclose",
    "decode_date",
    "decode_age",
    "decode_country_list",
    "decode_disclosed_fields",
    "concat_segments",
    # Dates and scope
    "parse_ascii_date",
    "is_current_date_valid",
    "bind_scope",
    "verify_scopes",
    # Public inputs
    "PublicInputs",
    "AGGREGATION_TAIL_SIZE",
    # Registry
    "AdminCapability",
    "AuditEvent",
    "PauseScope",
    "TrustRegistry",
    "VerifierHandle",
    "Ed25519ProofVerifier",
    # Verify
    "VerificationResult",
    "IDProofVerifier",
    "verify_committed_inputs",
    "get_disclosed_data",
    "get_disclose_proof_inputs",
    "get_date_proof_inputs",
    "get_age_proof_inputs",
    "get_country_proof_inputs",
    # Producer
    "mask_for_fields",
    "apply_disclosure_mask",
    "compute_param_commitment",
    "compute_disclose_commitment",
    "compute_inbound_commitment",
    "derive_scoped_nullifier",
    "build_public_inputs",
    # QR
    "ProofRequestQRData",
    "generate_request_qr",
    "parse_request_qr",
    # Config
    "VerifierSettings",
    "configure_logging",
    "load_registry_file",
    "registry_from_settings",
    # Meta
    "__version__",
]
