"""
zero_reveal_id/scope.py
Scope and subscope commitments binding a proof to a verifying service.
"""
from typing import Tuple

from .crypto import commitment_of, field_equals


def scope_commitment(value: str) -> int:
    """Commit to one scope string; the empty string binds nothing (zero)."""
    if not value:
        return 0
    return commitment_of(value.encode('utf-8'))


def bind_scope(scope: str, subscope: str) -> Tuple[int, int]:
    """Derive the (scope, subscope) commitments expected in the public inputs.

    Args:
        scope: Service scope, typically a domain name
        subscope: Finer-grained scope within the service

    Returns:
        Tuple of field elements, zero for each empty string
    """
    return scope_commitment(scope), scope_commitment(subscope)


def verify_scopes(scope_input: int, subscope_input: int, scope: str, subscope: str) -> bool:
    """Check public input slots 9 and 10 against the expected scopes."""
    expected_scope, expected_subscope = bind_scope(scope, subscope)
    scope_ok = field_equals(scope_input, expected_scope)
    subscope_ok = field_equals(subscope_input, expected_subscope)
    return scope_ok and subscope_ok
