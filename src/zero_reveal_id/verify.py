"""
zero_reveal_id/verify.py
Proof acceptance workflow and read-only inspection entry points.

Checks run cheapest first and stop at the first failure:

    1. resolve verifier        VerifierNotFoundError
    2. strip aggregation tail  MalformedPublicInputsError
    3. trusted root            UntrustedRootError
    4. current date window     ExpiredOrInvalidDateError
    5. scope binding           ScopeMismatchError
    6. parameter commitments   InvalidCommitmentError
    7. delegated proof check   returned as VerificationResult.verified
"""
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .codec import (
    AgeProofInputs,
    CountryProofInputs,
    DateProofInputs,
    DiscloseProofInputs,
    DisclosedData,
    DocumentType,
    ProofType,
    decode_age,
    decode_country_list,
    decode_date,
    decode_disclose,
    decode_disclosed_fields,
    find_segment,
    split_segments,
)
from .crypto import FieldLike, commitment_of, field_equals
from .dates import is_current_date_valid
from .errors import (
    ExpiredOrInvalidDateError,
    InvalidCommitmentError,
    MalformedPublicInputsError,
    ScopeMismatchError,
    UntrustedRootError,
    VerificationError,
    VerifierNotFoundError,
)
from .public_inputs import PublicInputs
from .registry import TrustRegistry, VKeyId, normalize_vkey_id
from .scope import verify_scopes

logger = logging.getLogger(__name__)

REJECTION_STEPS = {
    VerifierNotFoundError: "resolve_verifier",
    MalformedPublicInputsError: "public_inputs",
    UntrustedRootError: "trusted_root",
    ExpiredOrInvalidDateError: "current_date",
    ScopeMismatchError: "scope",
    InvalidCommitmentError: "commitment",
}


def _vkey_hex(vkey_id: VKeyId) -> str:
    try:
        return normalize_vkey_id(vkey_id).hex()[:16]
    except (TypeError, ValueError):
        return "<malformed>"


@dataclass
class VerificationResult:
    """Outcome of a proof that passed every precondition."""
    verified: bool
    nullifier: int


def verify_committed_inputs(param_commitments: Sequence[int], committed_inputs: bytes,
                            segment_lengths: Sequence[int]) -> bool:
    """Check each committed segment hashes to its parameter commitment.

    Args:
        param_commitments: Public input slots from index 11 on, in
            segment order
        committed_inputs: Concatenated segment bytes
        segment_lengths: Byte length of each segment

    Returns:
        True if every segment matches its slot

    Raises:
        MalformedBufferError: If the lengths do not cover the buffer
    """
    segments = split_segments(committed_inputs, segment_lengths)
    if len(segments) > len(param_commitments):
        logger.debug("%d segments but only %d commitment slots",
                     len(segments), len(param_commitments))
        return False
    for index, segment in enumerate(segments):
        if not field_equals(commitment_of(segment.data), param_commitments[index]):
            logger.debug("commitment mismatch at segment %d", index)
            return False
    return True


class IDProofVerifier:
    """Verifies identity-document proofs against a trust registry.

    Stateless across calls; safe to share between threads.

    Example:
        verifier = IDProofVerifier(registry)
        result = verifier.verify_proof(
            vkey_id, proof, public_inputs, committed_inputs,
            segment_lengths, validity_period_in_days=7,
            scope="example.com", subscope="bigproof",
        )
    """

    def __init__(self, registry: TrustRegistry, clock: Optional[Callable[[], int]] = None):
        self.registry = registry
        self._clock = clock or (lambda: int(time.time()))

    def verify_proof(
        self,
        vkey_id: VKeyId,
        proof: bytes,
        public_inputs: Sequence[FieldLike],
        committed_inputs: bytes,
        segment_lengths: Sequence[int],
        validity_period_in_days: int,
        scope: str = "",
        subscope: str = "",
    ) -> VerificationResult:
        """Run the full acceptance workflow for one proof.

        Returns:
            VerificationResult; `verified` may be False when the proof
            itself does not check out

        Raises:
            VerificationError: The first failed precondition
            MalformedBufferError: If segment lengths do not cover the buffer
        """
        try:
            handle = self.registry.lookup(vkey_id)
            inputs = PublicInputs.parse(public_inputs)

            if not self.registry.is_trusted_root(inputs.certificate_root):
                raise UntrustedRootError(
                    f"certificate root {inputs.certificate_root:#x} is not trusted"
                )

            if not is_current_date_valid(inputs.values, validity_period_in_days, self._clock()):
                raise ExpiredOrInvalidDateError("proof date is invalid or outside the validity period")

            if not verify_scopes(inputs.scope, inputs.subscope, scope, subscope):
                raise ScopeMismatchError("proof is not bound to the requested scope")

            if not verify_committed_inputs(inputs.param_commitments, committed_inputs,
                                           segment_lengths):
                raise InvalidCommitmentError("committed inputs do not match the proof")
        except VerificationError as exc:
            logger.warning("proof rejected at %s step for vkey %s: %s",
                           REJECTION_STEPS.get(type(exc), type(exc).__name__),
                           _vkey_hex(vkey_id), exc)
            raise

        verified = bool(handle.verify(bytes(proof), inputs.values))
        logger.info("proof checked: verified=%s nullifier=%s...", verified,
                    hex(inputs.nullifier)[:10])
        return VerificationResult(verified=verified, nullifier=inputs.nullifier)


# Read-only inspection

def get_disclosed_data(disclosed_bytes: bytes, is_id_card: bool) -> DisclosedData:
    """Decode named document fields from the 90 disclosed bytes."""
    document_type = DocumentType.ID_CARD if is_id_card else DocumentType.PASSPORT
    return decode_disclosed_fields(disclosed_bytes, document_type)


def get_disclose_proof_inputs(committed_inputs: bytes,
                              segment_lengths: Sequence[int]) -> DiscloseProofInputs:
    segment = find_segment(committed_inputs, segment_lengths, ProofType.DISCLOSE)
    return decode_disclose(segment)


def get_date_proof_inputs(committed_inputs: bytes, segment_lengths: Sequence[int],
                          proof_type: ProofType) -> DateProofInputs:
    segment = find_segment(committed_inputs, segment_lengths, proof_type)
    return decode_date(segment, proof_type)


def get_age_proof_inputs(committed_inputs: bytes,
                         segment_lengths: Sequence[int]) -> AgeProofInputs:
    segment = find_segment(committed_inputs, segment_lengths, ProofType.AGE)
    return decode_age(segment)


def get_country_proof_inputs(committed_inputs: bytes, segment_lengths: Sequence[int],
                             proof_type: ProofType) -> CountryProofInputs:
    segment = find_segment(committed_inputs, segment_lengths, proof_type)
    return decode_country_list(segment, proof_type)
