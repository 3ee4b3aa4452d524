# =============================================================================
# core/config.py  —  Runtime Settings
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Collects the handful of knobs the server reads from the environment into
#   one frozen Settings object.  main.py calls load_dotenv() first, so a
#   local .env file works the same as exported variables.
#
# VARIABLES:
#   IPFS_API_BASE            Node RPC base URL (default: local Kubo node)
#   IPFS_EMPTY_FETCH_POLICY  "missing" or "content" (see EmptyBodyPolicy)
#   IPFS_TIMEOUT             Seconds; unset keeps the httpx default
#   IPFS_LOG_LEVEL           Logging level name (default: INFO)
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from core.models import EmptyBodyPolicy

IPFS_API_BASE = "http://127.0.0.1:5001/api/v0"


@dataclass(frozen=True)
class Settings:
    """Everything the process needs to talk to the node."""

    api_base: str = IPFS_API_BASE
    empty_fetch_policy: EmptyBodyPolicy = EmptyBodyPolicy.MISSING
    timeout: Optional[float] = None
    log_level: str = "INFO"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from environment variables.

    Args:
        environ: Mapping to read from; defaults to os.environ.

    Raises:
        ValueError: If IPFS_EMPTY_FETCH_POLICY or IPFS_TIMEOUT is malformed.
    """
    env = os.environ if environ is None else environ

    policy_name = env.get("IPFS_EMPTY_FETCH_POLICY", EmptyBodyPolicy.MISSING.value)
    try:
        policy = EmptyBodyPolicy(policy_name.strip().lower())
    except ValueError:
        allowed = ", ".join(p.value for p in EmptyBodyPolicy)
        raise ValueError(
            f"IPFS_EMPTY_FETCH_POLICY must be one of: {allowed} (got {policy_name!r})"
        ) from None

    raw_timeout = env.get("IPFS_TIMEOUT", "").strip()
    timeout = float(raw_timeout) if raw_timeout else None

    return Settings(
        api_base=env.get("IPFS_API_BASE", IPFS_API_BASE).rstrip("/"),
        empty_fetch_policy=policy,
        timeout=timeout,
        log_level=env.get("IPFS_LOG_LEVEL", "INFO").upper(),
    )
