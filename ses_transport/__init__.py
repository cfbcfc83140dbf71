"""Amazon SES transport for sending composed e-mail through SendRawEmail."""

__version__ = "1.0.0"

from ses_transport.mail import ComposedMessage, Mail
from ses_transport.transport import (
    AioSESClient,
    SESMockClient,
    SESSendError,
    SESTransport,
    SendResult,
    Transport,
    TransportConfig,
    create,
    translate,
)

__all__ = [
    "__version__",
    "AioSESClient",
    "ComposedMessage",
    "Mail",
    "SESMockClient",
    "SESSendError",
    "SESTransport",
    "SendResult",
    "Transport",
    "TransportConfig",
    "create",
    "translate",
]
