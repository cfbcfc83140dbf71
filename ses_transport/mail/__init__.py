"""Mail objects the transport can send."""

from ses_transport.mail.composer import ComposedMessage, Mail

__all__ = [
    "ComposedMessage",
    "Mail",
]
