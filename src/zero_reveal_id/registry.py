"""
zero_reveal_id/registry.py
Trust registry: vkey identifier -> verifier handle, and the set of
trusted certificate registry roots.

Mutations are admin-only and serialized by a writer lock. Each one
swaps in a fresh mapping, so concurrent verifications read a
consistent snapshot without locking. Pausing freezes mutations only;
lookups and verification keep working against the current state.
"""
import logging
import secrets
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

from .crypto import FieldLike, constant_time_compare, to_field_element
from .errors import RegistryPausedError, UnauthorizedError, VerifierNotFoundError
from .verifiers import VerifierHandle

logger = logging.getLogger(__name__)

VKEY_ID_LENGTH = 32

VKeyId = Union[bytes, str]


class PauseScope(Enum):
    """Registry mutations that can be paused."""
    ADD_VERIFIER = "add_verifier"
    REMOVE_VERIFIER = "remove_verifier"
    ADD_ROOT = "add_root"
    REMOVE_ROOT = "remove_root"


@dataclass(frozen=True)
class AdminCapability:
    """Bearer token proving the holder is the registry admin."""
    principal: str
    token: bytes = field(default_factory=lambda: secrets.token_bytes(32), repr=False)


@dataclass(frozen=True)
class AuditEvent:
    """Record of one admin action."""
    action: str
    actor: str
    subject: str = ""
    new_admin: str = ""
    timestamp: float = field(default_factory=time.time)


AuditListener = Callable[[AuditEvent], None]


def normalize_vkey_id(vkey_id: VKeyId) -> bytes:
    """Normalize a vkey identifier given as 32 bytes or hex string.

    Raises:
        ValueError: If it does not decode to exactly 32 bytes
    """
    if isinstance(vkey_id, str):
        text = vkey_id[2:] if vkey_id[:2].lower() == '0x' else vkey_id
        vkey_id = bytes.fromhex(text)
    if not isinstance(vkey_id, (bytes, bytearray)):
        raise TypeError("vkey id must be bytes or hex string")
    if len(vkey_id) != VKEY_ID_LENGTH:
        raise ValueError(f"vkey id must be {VKEY_ID_LENGTH} bytes, got {len(vkey_id)}")
    return bytes(vkey_id)


class TrustRegistry:
    """Process-wide registry of verifiers and trusted roots.

    Example:
        registry, admin = TrustRegistry.create("ops")
        registry.register_verifier(admin, vkey_id, handle)
        registry.add_trusted_root(admin, root)
    """

    def __init__(self, admin: AdminCapability):
        self._admin = admin
        self._verifiers: Dict[bytes, VerifierHandle] = {}
        self._roots: FrozenSet[int] = frozenset()
        self._paused: FrozenSet[PauseScope] = frozenset()
        self._listeners: List[AuditListener] = []
        self._lock = threading.Lock()

    @classmethod
    def create(cls, principal: str = "admin") -> Tuple['TrustRegistry', AdminCapability]:
        """Create a registry and the capability that administers it."""
        admin = AdminCapability(principal=principal)
        return cls(admin), admin

    # Reads

    @property
    def admin(self) -> str:
        return self._admin.principal

    def lookup(self, vkey_id: VKeyId) -> VerifierHandle:
        """Return the verifier for a vkey identifier.

        Raises:
            VerifierNotFoundError: If none is registered
        """
        try:
            key = normalize_vkey_id(vkey_id)
        except (TypeError, ValueError) as exc:
            raise VerifierNotFoundError(f"invalid vkey id: {exc}") from exc
        handle = self._verifiers.get(key)
        if handle is None:
            raise VerifierNotFoundError(f"no verifier for vkey {key.hex()}")
        return handle

    def has_verifier(self, vkey_id: VKeyId) -> bool:
        try:
            self.lookup(vkey_id)
        except VerifierNotFoundError:
            return False
        return True

    def is_trusted_root(self, root: FieldLike) -> bool:
        try:
            return to_field_element(root) in self._roots
        except (TypeError, ValueError):
            return False

    def is_paused(self, scope: PauseScope) -> bool:
        return scope in self._paused

    def add_listener(self, listener: AuditListener) -> None:
        self._listeners.append(listener)

    # Admin mutations

    def register_verifier(self, caller: AdminCapability, vkey_id: VKeyId,
                          handle: VerifierHandle) -> None:
        """Register or overwrite the verifier for a vkey identifier."""
        key = normalize_vkey_id(vkey_id)
        with self._lock:
            self._authorize(caller, PauseScope.ADD_VERIFIER)
            verifiers = dict(self._verifiers)
            verifiers[key] = handle
            self._verifiers = verifiers
        self._emit("add_verifier", caller, key.hex())

    def remove_verifier(self, caller: AdminCapability, vkey_id: VKeyId) -> None:
        key = normalize_vkey_id(vkey_id)
        with self._lock:
            self._authorize(caller, PauseScope.REMOVE_VERIFIER)
            verifiers = dict(self._verifiers)
            verifiers.pop(key, None)
            self._verifiers = verifiers
        self._emit("remove_verifier", caller, key.hex())

    def add_trusted_root(self, caller: AdminCapability, root: FieldLike) -> None:
        value = to_field_element(root)
        with self._lock:
            self._authorize(caller, PauseScope.ADD_ROOT)
            self._roots = self._roots | {value}
        self._emit("add_root", caller, hex(value))

    def remove_trusted_root(self, caller: AdminCapability, root: FieldLike) -> None:
        value = to_field_element(root)
        with self._lock:
            self._authorize(caller, PauseScope.REMOVE_ROOT)
            self._roots = self._roots - {value}
        self._emit("remove_root", caller, hex(value))

    def pause(self, caller: AdminCapability,
              scopes: Optional[Iterable[PauseScope]] = None) -> None:
        """Freeze the given mutations (all four by default)."""
        scopes = frozenset(PauseScope if scopes is None else scopes)
        with self._lock:
            self._authorize(caller)
            self._paused = self._paused | scopes
        self._emit("pause", caller, ",".join(sorted(s.value for s in scopes)))

    def unpause(self, caller: AdminCapability,
                scopes: Optional[Iterable[PauseScope]] = None) -> None:
        scopes = frozenset(PauseScope if scopes is None else scopes)
        with self._lock:
            self._authorize(caller)
            self._paused = self._paused - scopes
        self._emit("unpause", caller, ",".join(sorted(s.value for s in scopes)))

    def transfer_admin(self, caller: AdminCapability, new_principal: str) -> AdminCapability:
        """Hand admin rights to a new principal.

        The caller's capability stops working; the returned one replaces it.
        """
        new_admin = AdminCapability(principal=new_principal)
        with self._lock:
            self._authorize(caller)
            old_admin = self._admin
            self._admin = new_admin
        self._emit("transfer_admin", old_admin, new_admin=new_principal)
        return new_admin

    def _authorize(self, caller: AdminCapability, scope: Optional[PauseScope] = None) -> None:
        if not isinstance(caller, AdminCapability) or not constant_time_compare(
            caller.token, self._admin.token
        ):
            raise UnauthorizedError("caller is not the registry admin")
        if scope is not None and scope in self._paused:
            raise RegistryPausedError(f"{scope.value} is paused")

    def _emit(self, action: str, actor: AdminCapability, subject: str = "",
              new_admin: str = "") -> None:
        event = AuditEvent(action=action, actor=actor.principal, subject=subject,
                           new_admin=new_admin)
        if new_admin:
            logger.info("registry %s: %s -> %s", action, actor.principal, new_admin)
        else:
            logger.info("registry %s by %s: %s", action, actor.principal, subject)
        for listener in list(self._listeners):
            listener(event)
