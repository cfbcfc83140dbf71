"""Amazon SES transport: sends a composed mail object through SES SendRawEmail."""

import asyncio
from typing import Any, Callable, Mapping, Optional

from ses_transport import __version__
from ses_transport.transport.client import AioSESClient
from ses_transport.transport.errors import SESSendError
from ses_transport.transport.models import MESSAGE_ID_DOMAIN, SendResult, TransportConfig
from ses_transport.transport.options import resolve_options
from ses_transport.transport.protocol import MailObject, RawMailClient
from ses_transport.transport.stream import collect_stream
from ses_transport.utils.logger import get_logger

logger = get_logger("ses_transport.transport")

TRANSPORT_NAME = "SES"

SendCallback = Callable[[Optional[BaseException], Optional[SendResult]], Any]


def derive_message_id(data: Optional[Mapping[str, Any]]) -> Optional[str]:
    """SES MessageId as a full message identifier, or None when SES returned none."""
    if not data:
        return None
    message_id = data.get("MessageId")
    if not message_id:
        return None
    return f"{message_id}@{MESSAGE_ID_DOMAIN}"


def translate(
    err: Any, data: Optional[Mapping[str, Any]] = None
) -> tuple[Optional[BaseException], Optional[SendResult]]:
    """Map a provider (error, response) pair to (error, result); exactly one is set.

    Exceptions pass through as the same object; any other error value is
    wrapped in SESSendError("Email failed: <value>").
    """
    if err is not None:
        if not isinstance(err, BaseException):
            err = SESSendError(err)
        return err, None
    return None, SendResult(message_id=derive_message_id(data))


class SESTransport:
    """Mail transport delivering raw RFC-5322 messages via SES.

    Holds only the immutable TransportConfig and the client handle, so one
    instance can serve any number of concurrent sends.
    """

    name: str = TRANSPORT_NAME
    version: str = __version__

    def __init__(self, options: Any = None, client: Optional[RawMailClient] = None):
        self._config = resolve_options(options)
        self._client = client if client is not None else AioSESClient(self._config)
        logger.info(
            "ses_transport.init",
            region=self._config.region,
            api_version=self._config.api_version,
            client=type(self._client).__name__,
        )

    @property
    def config(self) -> TransportConfig:
        return self._config

    @property
    def client(self) -> RawMailClient:
        return self._client

    async def send(self, mail: MailObject) -> SendResult:
        """Serialize ``mail`` and send it with SendRawEmail.

        Raises whatever the message stream raises, unchanged, and provider
        errors as translated by ``translate``.
        """
        # SES strips the Bcc header from raw messages by itself
        mail.message.keep_bcc = True

        raw = await collect_stream(mail.message.create_read_stream())
        log = logger.bind(size=len(raw), region=self._config.region)
        log.debug("ses_transport.send.start")

        try:
            data = await self._client.send_raw_email(RawMessage={"Data": raw.encode("utf-8")})
        except Exception as exc:
            error, _ = translate(exc)
            log.warning("ses_transport.send.error", error=str(error), error_type=type(error).__name__)
            raise error

        _, result = translate(None, data)
        log.info("ses_transport.send.ok", message_id=result.message_id)
        return result

    def send_with_callback(self, mail: MailObject, callback: SendCallback) -> "asyncio.Task[SendResult]":
        """Schedule ``send(mail)`` and report through ``callback(error, result)``.

        Must be called with a running event loop. The callback runs exactly
        once, always after this method has returned: ``(None, result)`` on
        success, ``(error, None)`` otherwise. A task cancelled before or during
        the send reports a CancelledError.
        """
        task = asyncio.get_running_loop().create_task(self.send(mail))

        def _report(done: "asyncio.Task[SendResult]") -> None:
            if done.cancelled():
                callback(asyncio.CancelledError(), None)
                return
            error = done.exception()
            if error is not None:
                callback(error, None)
                return
            callback(None, done.result())

        task.add_done_callback(_report)
        return task

    async def close(self) -> None:
        """Release the client's connections (no-op for clients without close())."""
        close = getattr(self._client, "close", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> "SESTransport":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"SESTransport(region={self._config.region!r}, version={self.version!r})"


def create(options: Any = None, *, client: Optional[RawMailClient] = None) -> SESTransport:
    """Build an SES transport from ``options``; never raises on bad options."""
    return SESTransport(options, client=client)
