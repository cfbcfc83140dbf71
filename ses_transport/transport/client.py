"""Async Amazon SES client (aiobotocore) exposing the raw-send call."""

import asyncio
from typing import Any, Mapping, Optional

from aiobotocore.session import AioSession, get_session

from ses_transport.transport.models import CLIENT_PASSTHROUGH_KEYS, TransportConfig
from ses_transport.utils.logger import get_logger

logger = get_logger("ses_transport.client")

SERVICE_NAME = "ses"


class AioSESClient:
    """SES v1 client (API 2010-12-01) built from a TransportConfig.

    The underlying aiobotocore client is opened on first use and shared by all
    concurrent calls; close() releases its connection pool. SDK errors
    (botocore ClientError, connection errors) propagate unchanged.
    """

    def __init__(self, config: TransportConfig, session: Optional[AioSession] = None):
        self._config = config
        self._session = session or get_session()
        self._client: Any = None
        self._client_ctx: Any = None
        self._lock = asyncio.Lock()
        ignored = sorted(k for k in config.extra if k not in CLIENT_PASSTHROUGH_KEYS)
        if ignored:
            logger.debug("ses_client.options_ignored", keys=ignored)

    @property
    def config(self) -> TransportConfig:
        return self._config

    @property
    def is_open(self) -> bool:
        return self._client is not None

    async def _ensure_client(self) -> Any:
        async with self._lock:
            if self._client is None:
                ctx = self._session.create_client(SERVICE_NAME, **self._config.to_client_kwargs())
                self._client = await ctx.__aenter__()
                self._client_ctx = ctx
                logger.info(
                    "ses_client.open",
                    region=self._config.region,
                    api_version=self._config.api_version,
                    endpoint_url=self._config.endpoint_url,
                )
            return self._client

    async def send_raw_email(self, **params: Any) -> Mapping[str, Any]:
        """Call SES SendRawEmail with the given request parameters."""
        client = await self._ensure_client()
        return await client.send_raw_email(**params)

    async def close(self) -> None:
        """Close the aiobotocore client if it was opened."""
        async with self._lock:
            ctx = self._client_ctx
            self._client = None
            self._client_ctx = None
            if ctx is not None:
                await ctx.__aexit__(None, None, None)
                logger.info("ses_client.close", region=self._config.region)

    async def __aenter__(self) -> "AioSESClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"AioSESClient(region={self._config.region!r}, open={self.is_open})"
