"""Configuration and settings."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent
OUTPUT_DIR = Path(os.getenv("SES_TRANSPORT_OUTPUT_DIR", str(PROJECT_ROOT / "output")))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
VERBOSE_LOGGING = os.getenv("VERBOSE_LOGGING", "false").lower() == "true"
LOG_FILE = os.getenv("SES_TRANSPORT_LOG_FILE", "").strip() or None  # JSONL; console only when unset

# Mock client (dev): raw messages appended here instead of calling SES
SES_MOCK_OUTBOX_PATH = Path(
    os.getenv("SES_MOCK_OUTBOX_PATH", str(OUTPUT_DIR / "ses_outbox.json"))
)

# Environment variable -> transport option key
_ENV_OPTION_KEYS = (
    ("AWS_ACCESS_KEY_ID", "accessKeyId"),
    ("AWS_SECRET_ACCESS_KEY", "secretAccessKey"),
    ("AWS_SESSION_TOKEN", "sessionToken"),
    ("SES_SERVICE_URL", "serviceUrl"),
    ("SES_ENDPOINT_URL", "endpoint_url"),
)


def options_from_env(environ=None) -> dict[str, str]:
    """Build transport options from AWS_* / SES_* environment variables.

    Unset or empty variables are omitted so the transport's own defaults apply.
    AWS_REGION takes precedence over AWS_DEFAULT_REGION.
    """
    env = os.environ if environ is None else environ
    options: dict[str, str] = {}
    for env_key, option_key in _ENV_OPTION_KEYS:
        value = (env.get(env_key) or "").strip()
        if value:
            options[option_key] = value
    region = (env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION") or "").strip()
    if region:
        options["region"] = region
    return options
