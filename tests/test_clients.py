"""Tests for the aiobotocore SES client wrapper and the mock client."""

import asyncio
import json
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

# Allow importing ses_transport when running from project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from botocore.exceptions import ClientError

from ses_transport.mail import Mail
from ses_transport.transport import AioSESClient, SESMockClient, SESTransport, resolve_options


def _fake_session(sdk_client):
    """Session whose create_client returns an async context manager yielding sdk_client."""
    ctx = MagicMock()
    ctx.__aenter__ = AsyncMock(return_value=sdk_client)
    ctx.__aexit__ = AsyncMock(return_value=None)
    session = MagicMock()
    session.create_client.return_value = ctx
    return session, ctx


class TestAioSESClient(unittest.TestCase):
    """Lazy open, shared client, close, error passthrough."""

    def test_opens_lazily_with_config_kwargs(self):
        sdk = MagicMock()
        sdk.send_raw_email = AsyncMock(return_value={"MessageId": "m-1"})
        session, ctx = _fake_session(sdk)
        config = resolve_options({
            "region": "eu-west-1",
            "accessKeyId": "AKIA",
            "secretAccessKey": "secret",
        })
        client = AioSESClient(config, session=session)
        self.assertFalse(client.is_open)
        session.create_client.assert_not_called()

        async def run():
            return await client.send_raw_email(RawMessage={"Data": b"raw"})

        response = asyncio.run(run())
        self.assertEqual(response, {"MessageId": "m-1"})
        session.create_client.assert_called_once_with(
            "ses",
            region_name="eu-west-1",
            api_version="2010-12-01",
            aws_access_key_id="AKIA",
            aws_secret_access_key="secret",
        )
        sdk.send_raw_email.assert_awaited_once_with(RawMessage={"Data": b"raw"})
        self.assertTrue(client.is_open)

    def test_concurrent_calls_open_once(self):
        sdk = MagicMock()
        sdk.send_raw_email = AsyncMock(return_value={"MessageId": "m"})
        session, ctx = _fake_session(sdk)
        client = AioSESClient(resolve_options({}), session=session)

        async def run():
            await asyncio.gather(*(client.send_raw_email(RawMessage={"Data": b"x"}) for _ in range(5)))

        asyncio.run(run())
        session.create_client.assert_called_once()
        self.assertEqual(sdk.send_raw_email.await_count, 5)

    def test_close(self):
        sdk = MagicMock()
        sdk.send_raw_email = AsyncMock(return_value={})
        session, ctx = _fake_session(sdk)
        client = AioSESClient(resolve_options({}), session=session)

        async def run():
            async with client:
                await client.send_raw_email(RawMessage={"Data": b"x"})
            # closing again is a no-op
            await client.close()

        asyncio.run(run())
        ctx.__aexit__.assert_awaited_once_with(None, None, None)
        self.assertFalse(client.is_open)

    def test_close_without_open_does_nothing(self):
        session, ctx = _fake_session(MagicMock())
        client = AioSESClient(resolve_options({}), session=session)
        asyncio.run(client.close())
        ctx.__aexit__.assert_not_awaited()

    def test_client_error_passes_through_transport(self):
        error = ClientError(
            {"Error": {"Code": "MessageRejected", "Message": "Email address is not verified."}},
            "SendRawEmail",
        )
        sdk = MagicMock()
        sdk.send_raw_email = AsyncMock(side_effect=error)
        session, _ = _fake_session(sdk)
        transport = SESTransport({}, client=AioSESClient(resolve_options({}), session=session))
        mail = Mail(from_email="a@example.com", to=["b@example.com"], subject="s", text="t")

        with self.assertRaises(ClientError) as ctx:
            asyncio.run(transport.send(mail))
        self.assertIs(ctx.exception, error)


class TestSESMockClient(unittest.TestCase):
    """Mock client: ids, outbox persistence, failure mode."""

    def test_records_and_returns_ids(self):
        client = SESMockClient()
        transport = SESTransport(client=client)
        mail = Mail(from_email="a@example.com", to=["b@example.com"], bcc=["c@example.com"], subject="Hi", text="t")

        async def run():
            first = await transport.send(mail)
            second = await transport.send(mail)
            return first, second

        first, second = asyncio.run(run())
        self.assertEqual(first.message_id, "mock-00000001@email.amazonses.com")
        self.assertEqual(second.message_id, "mock-00000002@email.amazonses.com")
        self.assertEqual(len(client.sent_messages), 2)
        self.assertIn("Bcc: c@example.com", client.sent_messages[0])

    def test_outbox_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "outbox.json"
            client = SESMockClient(outbox_path=path)

            async def run():
                await client.send_raw_email(RawMessage={"Data": "Subject: one\r\n\r\n".encode()})
                await client.send_raw_email(RawMessage={"Data": "Subject: two\r\n\r\n".encode()})

            asyncio.run(run())
            items = json.loads(path.read_text(encoding="utf-8"))
            self.assertEqual([i["MessageId"] for i in items], ["mock-00000001", "mock-00000002"])
            self.assertTrue(items[1]["Data"].startswith("Subject: two"))
            self.assertTrue(items[0]["sentAt"].endswith("Z"))

    def test_fail_with(self):
        error = TimeoutError("read timeout")
        client = SESMockClient(fail_with=error)
        with self.assertRaises(TimeoutError) as ctx:
            asyncio.run(client.send_raw_email(RawMessage={"Data": b"x"}))
        self.assertIs(ctx.exception, error)
        self.assertEqual(client.requests, [])

    def test_no_message_id(self):
        client = SESMockClient(return_message_id=False)
        transport = SESTransport(client=client)
        mail = Mail(from_email="a@example.com", to=["b@example.com"], subject="s", text="t")
        result = asyncio.run(transport.send(mail))
        self.assertIsNone(result.message_id)


if __name__ == "__main__":
    unittest.main()
