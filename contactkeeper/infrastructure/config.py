"""
Configuration — reads all settings from environment variables.
Never hardcodes credentials. Uses python-dotenv for local dev.
CLI flags are layered on top with `with_overrides`.
"""

import os
from dataclasses import dataclass, replace

from dotenv import load_dotenv

load_dotenv()

VERIFICATION_MODES = ("search", "quality")

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise EnvironmentError(f"{key} must be an integer, got {raw!r}")


def _env_float(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise EnvironmentError(f"{key} must be a number, got {raw!r}")


@dataclass(frozen=True)
class Config:
    # CRM (Supabase)
    supabase_url: str
    supabase_service_key: str  # Service role key (backend only)

    # Run settings
    contact_limit: int = 10
    stale_months: int = 6
    dry_run: bool = False
    verbose: bool = False
    email_validation: bool = False
    verification_mode: str = "search"

    # Throttling
    min_request_delay_ms: int = 1000
    batch_size: int = 10
    contact_delay_seconds: float = 3.0

    # Browser & output
    browser_headless: bool = True
    report_dir: str = "."

    @classmethod
    def from_env(cls) -> "Config":
        missing = []
        required = [
            "SUPABASE_URL",
            "SUPABASE_SERVICE_KEY",
        ]
        for key in required:
            if not os.getenv(key):
                missing.append(key)

        if missing:
            raise EnvironmentError(
                f"Missing required environment variables: {', '.join(missing)}\n"
                f"Copy .env.example to .env and fill in the values."
            )

        mode = os.getenv("VERIFICATION_MODE", "search").strip().lower()
        if mode not in VERIFICATION_MODES:
            raise EnvironmentError(
                f"VERIFICATION_MODE must be one of {', '.join(VERIFICATION_MODES)}, got {mode!r}"
            )

        return cls(
            supabase_url=os.environ["SUPABASE_URL"],
            supabase_service_key=os.environ["SUPABASE_SERVICE_KEY"],
            contact_limit=_env_int("CONTACT_LIMIT", 10),
            stale_months=_env_int("STALE_MONTHS", 6),
            dry_run=_env_bool("DRY_RUN", False),
            verbose=_env_bool("VERBOSE", False),
            email_validation=_env_bool("EMAIL_VALIDATION", False),
            verification_mode=mode,
            min_request_delay_ms=_env_int("MIN_REQUEST_DELAY_MS", 1000),
            batch_size=_env_int("BATCH_SIZE", 10),
            contact_delay_seconds=_env_float("CONTACT_DELAY_SECONDS", 3.0),
            browser_headless=_env_bool("BROWSER_HEADLESS", True),
            report_dir=os.getenv("REPORT_DIR", "."),
        )

    def with_overrides(self, **changes) -> "Config":
        """Return a copy with CLI-supplied values applied. None means 'not given'."""
        applied = {k: v for k, v in changes.items() if v is not None}
        if not applied:
            return self
        return replace(self, **applied)
