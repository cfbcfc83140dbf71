"""Minimal mail composer: builds RFC-5322 messages and streams them in chunks.

Gives the SES transport a concrete mail object (``Mail``) without pulling in a
full mail library. ``Mail.message`` is the ReadableMessage the transport
consumes: a ``keep_bcc`` flag plus ``create_read_stream()``.
"""

import asyncio
import copy
import email
from email import policy
from email.message import EmailMessage
from email.utils import formatdate, make_msgid
from pathlib import Path
from typing import AsyncIterator, Optional, Sequence, Union

DEFAULT_CHUNK_SIZE = 16 * 1024

# CRLF line endings; non-ASCII bodies get quoted-printable or base64, never raw 8bit
COMPOSE_POLICY = policy.SMTP.clone(cte_type="7bit")

# (filename, content, content_type)
AttachmentSpec = tuple[str, bytes, str]


def _extract_domain(address: str) -> str:
    if "<" in address:
        address = address.split("<")[1].rstrip(">")
    return address.rsplit("@", 1)[-1] if "@" in address else "localhost"


class ComposedMessage:
    """A composed message that serializes lazily.

    ``keep_bcc`` is False by default: the Bcc header is dropped from the
    serialized output, as an SMTP client would. Transports that need it kept
    (SES removes it itself) set the flag before reading the stream.
    """

    def __init__(self, message: EmailMessage, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._message = message
        self.chunk_size = chunk_size
        self.keep_bcc = False

    @property
    def email_message(self) -> EmailMessage:
        return self._message

    def as_bytes(self) -> bytes:
        """Serialize with CRLF line endings, honoring ``keep_bcc``."""
        message = self._message
        if not self.keep_bcc and "Bcc" in message:
            message = copy.deepcopy(message)
            del message["Bcc"]
        return message.as_bytes(policy=message.policy.clone(linesep="\r\n"))

    def create_read_stream(self) -> AsyncIterator[bytes]:
        """Return a new single-pass async iterator over the serialized message."""
        return self._iter_chunks()

    async def _iter_chunks(self) -> AsyncIterator[bytes]:
        raw = self.as_bytes()
        for start in range(0, len(raw), self.chunk_size):
            await asyncio.sleep(0)
            yield raw[start:start + self.chunk_size]


class Mail:
    """An e-mail ready to hand to a transport.

    Usage::

        mail = Mail(
            from_email="App <noreply@example.com>",
            to=["user@example.com"],
            subject="Hello",
            text="Welcome!",
        )
        result = await transport.send(mail)
    """

    def __init__(
        self,
        from_email: str,
        to: Optional[Sequence[str]] = None,
        subject: str = "",
        text: str = "",
        html: Optional[str] = None,
        cc: Optional[Sequence[str]] = None,
        bcc: Optional[Sequence[str]] = None,
        reply_to: Optional[str] = None,
        headers: Optional[dict[str, str]] = None,
        attachments: Optional[Sequence[AttachmentSpec]] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        msg = EmailMessage(policy=COMPOSE_POLICY)
        msg["From"] = from_email
        if to:
            msg["To"] = ", ".join(to)
        if cc:
            msg["Cc"] = ", ".join(cc)
        if bcc:
            msg["Bcc"] = ", ".join(bcc)
        if reply_to:
            msg["Reply-To"] = reply_to
        msg["Subject"] = subject
        msg["Date"] = formatdate(localtime=True)
        msg["Message-ID"] = make_msgid(domain=_extract_domain(from_email))
        for key, value in (headers or {}).items():
            if key in msg:
                del msg[key]
            msg[key] = value

        msg.set_content(text or "")
        if html:
            msg.add_alternative(html, subtype="html")
        for filename, content, content_type in attachments or ():
            maintype, _, subtype = content_type.partition("/")
            msg.add_attachment(
                content,
                maintype=maintype,
                subtype=subtype or "octet-stream",
                filename=filename,
            )

        self.message = ComposedMessage(msg, chunk_size=chunk_size)

    @classmethod
    def from_message(cls, message: EmailMessage, chunk_size: int = DEFAULT_CHUNK_SIZE) -> "Mail":
        """Wrap an existing EmailMessage, adding Date / Message-ID when missing."""
        if "Date" not in message:
            message["Date"] = formatdate(localtime=True)
        if "Message-ID" not in message:
            message["Message-ID"] = make_msgid(domain=_extract_domain(str(message.get("From", ""))))
        mail = cls.__new__(cls)
        mail.message = ComposedMessage(message, chunk_size=chunk_size)
        return mail

    @classmethod
    def from_bytes(cls, raw: bytes, chunk_size: int = DEFAULT_CHUNK_SIZE) -> "Mail":
        """Parse a raw RFC-5322 message (e.g. the contents of an .eml file)."""
        message = email.message_from_bytes(raw, _class=EmailMessage, policy=policy.SMTP)
        return cls.from_message(message, chunk_size=chunk_size)

    @classmethod
    def from_file(cls, path: Union[str, Path], chunk_size: int = DEFAULT_CHUNK_SIZE) -> "Mail":
        """Parse an .eml file from disk."""
        return cls.from_bytes(Path(path).read_bytes(), chunk_size=chunk_size)

    @property
    def subject(self) -> str:
        return str(self.message.email_message.get("Subject", ""))

    def __repr__(self) -> str:
        msg = self.message.email_message
        return f"Mail(from={msg.get('From')!r}, to={msg.get('To')!r}, subject={self.subject!r})"
