"""SES transport: option normalization, raw-send client(s) and the transport itself."""

from ses_transport.transport.client import AioSESClient
from ses_transport.transport.errors import SESSendError
from ses_transport.transport.mock import SESMockClient
from ses_transport.transport.models import (
    DEFAULT_REGION,
    SES_API_VERSION,
    SendResult,
    TransportConfig,
)
from ses_transport.transport.options import region_from_service_url, resolve_options
from ses_transport.transport.protocol import (
    MailObject,
    RawMailClient,
    ReadableMessage,
    Transport,
)
from ses_transport.transport.ses import (
    TRANSPORT_NAME,
    SESTransport,
    create,
    derive_message_id,
    translate,
)
from ses_transport.transport.stream import collect_stream

__all__ = [
    "AioSESClient",
    "DEFAULT_REGION",
    "MailObject",
    "RawMailClient",
    "ReadableMessage",
    "SES_API_VERSION",
    "SESMockClient",
    "SESSendError",
    "SESTransport",
    "SendResult",
    "TRANSPORT_NAME",
    "Transport",
    "TransportConfig",
    "collect_stream",
    "create",
    "derive_message_id",
    "region_from_service_url",
    "resolve_options",
    "translate",
]
