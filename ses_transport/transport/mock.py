"""Mock SES client: records raw messages in memory and optionally a JSON outbox file."""

import asyncio
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from ses_transport.utils.logger import get_logger

logger = get_logger("ses_transport.mock")


class SESMockClient:
    """Stand-in for AioSESClient in development and tests.

    Every accepted message gets a deterministic MessageId (mock-00000001, ...).
    Set ``fail_with`` to an exception to make every send raise it.
    """

    def __init__(
        self,
        outbox_path: Optional[Path] = None,
        fail_with: Optional[BaseException] = None,
        return_message_id: bool = True,
    ):
        self._outbox_path = outbox_path
        self.fail_with = fail_with
        self.return_message_id = return_message_id
        self.requests: list[dict[str, Any]] = []
        self.closed = False
        logger.info(
            "ses_mock.init",
            outbox_path=str(outbox_path) if outbox_path else None,
        )

    @property
    def sent_messages(self) -> list[str]:
        """Raw messages received so far, decoded as UTF-8."""
        return [
            req["RawMessage"]["Data"].decode("utf-8", errors="replace")
            for req in self.requests
        ]

    def _load_outbox(self) -> list[dict[str, Any]]:
        if not self._outbox_path.exists():
            logger.debug("ses_mock.outbox_missing", outbox_path=str(self._outbox_path))
            return []
        with self._outbox_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, list) else data.get("value", [])

    def _append_outbox(self, record: dict[str, Any]) -> None:
        items = self._load_outbox()
        items.append(record)
        self._outbox_path.parent.mkdir(parents=True, exist_ok=True)
        with self._outbox_path.open("w", encoding="utf-8") as f:
            json.dump(items, f, indent=2, default=str)
        logger.debug("ses_mock.outbox_written", count=len(items), outbox_path=str(self._outbox_path))

    async def send_raw_email(self, **params: Any) -> dict[str, Any]:
        if self.fail_with is not None:
            logger.info("ses_mock.send.fail", error_type=type(self.fail_with).__name__)
            raise self.fail_with
        self.requests.append(params)
        message_id = f"mock-{len(self.requests):08d}"
        if self._outbox_path is not None:
            raw = params["RawMessage"]["Data"]
            await asyncio.to_thread(
                self._append_outbox,
                {
                    "MessageId": message_id,
                    "sentAt": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
                    "Data": raw.decode("utf-8", errors="replace"),
                },
            )
        logger.info("ses_mock.send", message_id=message_id)
        if not self.return_message_id:
            return {}
        return {"MessageId": message_id}

    async def close(self) -> None:
        self.closed = True
