"""
zero_reveal_id/errors.py
Exception hierarchy. Every error is terminal for the call that raised it.
"""


class ZeroRevealIDError(Exception):
    """Base class for all library errors."""


# Verification gates (orchestrator steps 1-6)

class VerificationError(ZeroRevealIDError):
    """A proof failed a precondition before cryptographic verification."""


class VerifierNotFoundError(VerificationError):
    """No verifier is registered for the vkey identifier."""


class MalformedPublicInputsError(VerificationError):
    """Public inputs are shorter than the fixed layout requires."""


class UntrustedRootError(VerificationError):
    """Certificate registry root is not in the trusted root set."""


class ExpiredOrInvalidDateError(VerificationError):
    """Embedded current date is malformed, in the future or too old."""


class ScopeMismatchError(VerificationError):
    """Scope or subscope commitment differs from the public inputs."""


class InvalidCommitmentError(VerificationError):
    """A committed-input segment does not hash to its public input."""


# Committed-input decoding

class DecodeError(ZeroRevealIDError, ValueError):
    """Committed-input buffer could not be decoded."""


class MalformedBufferError(DecodeError):
    """Segment lengths do not add up to the buffer length."""


class SegmentNotFoundError(DecodeError):
    """No segment matches the expected proof type tag and length."""


class InvalidDateError(ValueError):
    """An 8-byte ASCII date could not be parsed."""


# Registry administration

class RegistryError(ZeroRevealIDError):
    """Trust registry mutation was refused."""


class UnauthorizedError(RegistryError):
    """Caller does not hold the admin capability."""


class RegistryPausedError(RegistryError):
    """The requested mutation is currently paused."""
