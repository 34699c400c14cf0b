"""Unit tests for the payoff webhook client"""

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from envelope_gateway.infrastructure.clients.payoff_webhook import PayoffWebhookClient

PAYLOAD = {"event": "DEBT_PAID_OFF", "envelope_id": "debts", "debt_id": "card"}


def _ok_response() -> MagicMock:
    response = MagicMock()
    response.raise_for_status.return_value = None
    return response


async def test_disabled_without_url():
    """Test no request is made when no webhook is configured"""
    client = PayoffWebhookClient(webhook_url=None)
    client.webhook_url = None

    with patch.object(httpx.AsyncClient, "post", new_callable=AsyncMock) as mock_post:
        await client.send_payoff_event(PAYLOAD)

    assert client.enabled is False
    mock_post.assert_not_called()


async def test_sends_payload():
    client = PayoffWebhookClient(webhook_url="http://hooks.test/payoff")

    with patch.object(httpx.AsyncClient, "post", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = _ok_response()
        await client.send_payoff_event(PAYLOAD)

    mock_post.assert_awaited_once_with("http://hooks.test/payoff", json=PAYLOAD)


async def test_retries_then_succeeds():
    """Test network errors are retried with backoff"""
    client = PayoffWebhookClient(webhook_url="http://hooks.test/payoff")
    client.backoff_base = 0

    with patch.object(httpx.AsyncClient, "post", new_callable=AsyncMock) as mock_post:
        mock_post.side_effect = [httpx.ConnectError("connection refused"), _ok_response()]
        await client.send_payoff_event(PAYLOAD)

    assert mock_post.await_count == 2


async def test_gives_up_after_max_retries():
    client = PayoffWebhookClient(webhook_url="http://hooks.test/payoff")
    client.backoff_base = 0
    client.max_retries = 3

    with patch.object(httpx.AsyncClient, "post", new_callable=AsyncMock) as mock_post:
        mock_post.side_effect = httpx.ConnectError("connection refused")
        with pytest.raises(httpx.ConnectError):
            await client.send_payoff_event(PAYLOAD)

    assert mock_post.await_count == 3
