"""
zero_reveal_id/config.py
Environment settings and JSON registry bootstrap.

Environment:
    ZRID_VALIDITY_PERIOD_DAYS  default proof freshness window (7)
    ZRID_REGISTRY_PATH         optional JSON registry file
    ZRID_LOG_LEVEL             log level for configure_logging (WARNING)

Registry file:
    {
      "trusted_roots": ["0x...", ...],
      "verifiers": {
        "<vkey id hex>": {"kind": "ed25519", "public_key": "<hex>", "enabled": true}
      }
    }
"""
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .registry import AdminCapability, TrustRegistry
from .verifiers import Ed25519ProofVerifier, VerifierHandle

logger = logging.getLogger(__name__)

DEFAULT_VALIDITY_PERIOD_DAYS = 7
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class VerifierSettings:
    validity_period_in_days: int = DEFAULT_VALIDITY_PERIOD_DAYS
    registry_path: Optional[Path] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> 'VerifierSettings':
        try:
            validity = int(os.getenv("ZRID_VALIDITY_PERIOD_DAYS", str(DEFAULT_VALIDITY_PERIOD_DAYS)))
        except ValueError:
            validity = DEFAULT_VALIDITY_PERIOD_DAYS
        path = os.getenv("ZRID_REGISTRY_PATH", "").strip()
        level = os.getenv("ZRID_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL
        return cls(
            validity_period_in_days=validity,
            registry_path=Path(path) if path else None,
            log_level=level,
        )


def configure_logging(settings: Optional[VerifierSettings] = None) -> None:
    """Opt-in logging setup for applications embedding the verifier."""
    settings = settings or VerifierSettings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_handle(entry: Dict[str, Any]) -> VerifierHandle:
    kind = entry.get("kind")
    if kind == "ed25519":
        return Ed25519ProofVerifier(public_key=entry["public_key"])
    raise ValueError(f"Unknown verifier kind: {kind}")


def load_registry_file(path: Path, registry: TrustRegistry, admin: AdminCapability) -> int:
    """Apply a JSON registry file through the admin-gated operations.

    Returns:
        Number of verifiers registered

    Raises:
        ValueError: On unknown verifier kinds or malformed identifiers
        UnauthorizedError: If admin does not administer the registry
    """
    data = json.loads(Path(path).read_text(encoding="utf-8-sig"))

    for root in data.get("trusted_roots", []):
        registry.add_trusted_root(admin, root)

    registered = 0
    for vkey_id, entry in data.get("verifiers", {}).items():
        if not entry.get("enabled", True):
            logger.info("skipping disabled verifier %s", vkey_id)
            continue
        registry.register_verifier(admin, vkey_id, _build_handle(entry))
        registered += 1
    return registered


def registry_from_settings(settings: VerifierSettings,
                           principal: str = "admin") -> Tuple[TrustRegistry, AdminCapability]:
    """Create a registry, loading the configured registry file if any."""
    registry, admin = TrustRegistry.create(principal)
    if settings.registry_path is not None:
        count = load_registry_file(settings.registry_path, registry, admin)
        logger.info("loaded %d verifiers from %s", count, settings.registry_path)
    return registry, admin
