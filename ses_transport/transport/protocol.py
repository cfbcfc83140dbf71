"""Transport protocol and the collaborator interfaces it consumes."""

from typing import Any, Mapping, Protocol, runtime_checkable

from ses_transport.transport.models import SendResult
from ses_transport.transport.stream import ChunkStream


class ReadableMessage(Protocol):
    """Composed message: a Bcc-retention flag and a single-pass chunk stream."""

    keep_bcc: bool

    def create_read_stream(self) -> ChunkStream:
        """Return a fresh lazy chunk sequence of the fully composed RFC-5322 message."""
        ...


class MailObject(Protocol):
    """What a mail library hands to a transport."""

    message: ReadableMessage


class RawMailClient(Protocol):
    """Cloud mail client: the one SES call this transport needs."""

    async def send_raw_email(self, **params: Any) -> Mapping[str, Any]:
        """Send ``RawMessage={"Data": bytes}``; response may carry ``MessageId``."""
        ...


@runtime_checkable
class Transport(Protocol):
    """Anything a mail library can deliver through."""

    name: str
    version: str

    async def send(self, mail: MailObject) -> SendResult:
        """Deliver ``mail``; raise on failure."""
        ...
