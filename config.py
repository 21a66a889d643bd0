import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

TRUTHY = ("1", "true", "yes", "y", "on")


def _getenv(*names: str, default: str = "") -> str:
    """Returns the first non-empty environment variable among `names`."""
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return default


@dataclass(frozen=True)
class Settings:
    staging_url: str
    production_url: str
    # Service account key JSON, or a path to the key file.
    service_account_key: str = ""
    forward_raise_for_status: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        staging_url = _getenv("STAGING_URL", "STAG")
        production_url = _getenv("PRODUCTION_URL", "PROD")

        if not staging_url or not production_url:
            raise ValueError("Relay configuration is incomplete. Check STAGING_URL and PRODUCTION_URL environment variables.")

        return cls(
            staging_url=staging_url,
            production_url=production_url,
            service_account_key=_getenv("SERVICE_ACCOUNT_JSON_KEY", "GOOGLE_APPLICATION_CREDENTIALS"),
            forward_raise_for_status=_getenv("FORWARD_RAISE_FOR_STATUS").strip().lower() in TRUTHY,
        )
