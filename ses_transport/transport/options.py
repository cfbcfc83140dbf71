"""Option normalization: caller-supplied options -> immutable TransportConfig."""

import re
from collections.abc import Mapping
from typing import Any, Optional

from ses_transport.transport.models import (
    DEFAULT_REGION,
    SES_API_VERSION,
    TransportConfig,
)
from ses_transport.utils.logger import get_logger

logger = get_logger("ses_transport.options")

# Legacy SES endpoint URLs, e.g. https://email.us-west-2.amazonaws.com
SERVICE_URL_PATTERN = re.compile(r"(.*)email(.*)\.(.*)\.amazonaws\.com", re.IGNORECASE)

# Lookup order per field: new-style names first, legacy alias last
ACCESS_KEY_KEYS = ("accessKeyId", "access_key_id", "aws_access_key_id", "AWSAccessKeyID")
SECRET_KEY_KEYS = ("secretAccessKey", "secret_access_key", "aws_secret_access_key", "AWSSecretKey")
SESSION_TOKEN_KEYS = ("sessionToken", "session_token", "aws_session_token", "AWSSecurityToken")
REGION_KEYS = ("region", "region_name")
SERVICE_URL_KEYS = ("serviceUrl", "service_url", "ServiceUrl")
ENDPOINT_KEYS = ("endpoint_url", "endpoint")

_RECOGNIZED_KEYS = frozenset(
    ACCESS_KEY_KEYS
    + SECRET_KEY_KEYS
    + SESSION_TOKEN_KEYS
    + REGION_KEYS
    + SERVICE_URL_KEYS
    + ENDPOINT_KEYS
    + ("apiVersion", "api_version")
)


def _first_text(options: Mapping, keys: tuple[str, ...]) -> Optional[str]:
    """First non-empty string value among keys; anything else falls through."""
    for key in keys:
        value = options.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def region_from_service_url(service_url: Any) -> Optional[str]:
    """Region embedded in a legacy SES service URL, or None when it does not match."""
    if not isinstance(service_url, str):
        return None
    match = SERVICE_URL_PATTERN.search(service_url)
    if match is None:
        return None
    return match.group(3) or None


def resolve_options(options: Any = None) -> TransportConfig:
    """Normalize transport options into a TransportConfig. Never raises.

    Credentials prefer the new-style key over the legacy alias. Region is the
    explicit ``region`` option, else the region parsed from ``serviceUrl``,
    else us-east-1. The API version is always pinned.
    """
    if not isinstance(options, Mapping):
        if options is not None:
            logger.debug("options.ignored", options_type=type(options).__name__)
        options = {}

    region = (
        _first_text(options, REGION_KEYS)
        or region_from_service_url(_first_text(options, SERVICE_URL_KEYS))
        or DEFAULT_REGION
    )
    extra = {
        key: value
        for key, value in options.items()
        if isinstance(key, str) and key not in _RECOGNIZED_KEYS
    }
    return TransportConfig(
        access_key_id=_first_text(options, ACCESS_KEY_KEYS),
        secret_access_key=_first_text(options, SECRET_KEY_KEYS),
        session_token=_first_text(options, SESSION_TOKEN_KEYS),
        api_version=SES_API_VERSION,
        region=region,
        endpoint_url=_first_text(options, ENDPOINT_KEYS),
        extra=extra,
    )
