"""
zero_reveal_id/public_inputs.py
Fixed public-input layout of identity proofs.

    [0]                  certificate registry root
    [1..8]               current date, one ASCII byte per slot
    [9]                  scope commitment (0 if unbound)
    [10]                 subscope commitment (0 if unbound)
    [11 .. N-18]         one parameter commitment per committed segment
    [N-17]               scoped nullifier
    [N-16 .. N-1]        proof aggregation tail, opaque
"""
from dataclasses import dataclass
from typing import Sequence, Tuple

from .crypto import FieldLike, to_field_element
from .errors import MalformedPublicInputsError

AGGREGATION_TAIL_SIZE = 16
CERTIFICATE_ROOT_INDEX = 0
CURRENT_DATE_INDEX = 1
SCOPE_INDEX = 9
SUBSCOPE_INDEX = 10
PARAM_COMMITMENTS_INDEX = 11
MIN_ACTUAL_COUNT = PARAM_COMMITMENTS_INDEX + 1  # fixed slots plus the nullifier


@dataclass(frozen=True)
class PublicInputs:
    """Validated public-input vector with named accessors."""
    values: Tuple[int, ...]

    @classmethod
    def parse(cls, raw: Sequence[FieldLike]) -> 'PublicInputs':
        """Normalize and validate a raw public-input sequence.

        Raises:
            MalformedPublicInputsError: If an element is not a field
                element or fewer than 12 slots remain once the
                aggregation tail is stripped
        """
        try:
            values = tuple(to_field_element(value) for value in raw)
        except (TypeError, ValueError) as exc:
            raise MalformedPublicInputsError(f"invalid public input: {exc}") from exc
        if len(values) - AGGREGATION_TAIL_SIZE < MIN_ACTUAL_COUNT:
            raise MalformedPublicInputsError(
                f"expected at least {MIN_ACTUAL_COUNT + AGGREGATION_TAIL_SIZE} "
                f"public inputs, got {len(values)}"
            )
        return cls(values=values)

    @property
    def actual_count(self) -> int:
        return len(self.values) - AGGREGATION_TAIL_SIZE

    @property
    def certificate_root(self) -> int:
        return self.values[CERTIFICATE_ROOT_INDEX]

    @property
    def current_date_slots(self) -> Tuple[int, ...]:
        return self.values[CURRENT_DATE_INDEX:SCOPE_INDEX]

    @property
    def scope(self) -> int:
        return self.values[SCOPE_INDEX]

    @property
    def subscope(self) -> int:
        return self.values[SUBSCOPE_INDEX]

    @property
    def param_commitments(self) -> Tuple[int, ...]:
        return self.values[PARAM_COMMITMENTS_INDEX:self.actual_count - 1]

    @property
    def nullifier(self) -> int:
        return self.values[self.actual_count - 1]

    @property
    def aggregation_tail(self) -> Tuple[int, ...]:
        return self.values[self.actual_count:]

    def __len__(self) -> int:
        return len(self.values)
