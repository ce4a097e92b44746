"""Unit tests for payout webhook retries"""

import asyncio
import httpx
import pytest
from unittest.mock import AsyncMock, patch
from venue_ledger.domain.exceptions import PayoutNotificationError
from venue_ledger.infrastructure.clients.payout import PayoutClient

PAYLOAD = {"event": "WITHDRAWAL_APPROVED", "account_id": "acct-1", "amount": 400}


def _response(status_code: int) -> httpx.Response:
    return httpx.Response(status_code, request=httpx.Request("POST", "http://payout.test/hook"))


@patch("venue_ledger.infrastructure.clients.payout.asyncio.sleep", new_callable=AsyncMock)
@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
def test_retries_until_success(mock_post: AsyncMock, mock_sleep: AsyncMock):
    """Test 5xx responses are retried with exponential backoff"""
    mock_post.side_effect = [_response(503), _response(502), _response(200)]
    client = PayoutClient(webhook_url="http://payout.test/hook")

    asyncio.run(client.send_withdrawal_event(PAYLOAD))

    assert mock_post.call_count == 3
    assert mock_post.call_args.kwargs["json"] == PAYLOAD
    assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0]


@patch("venue_ledger.infrastructure.clients.payout.asyncio.sleep", new_callable=AsyncMock)
@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
def test_gives_up_after_max_retries(mock_post: AsyncMock, mock_sleep: AsyncMock):
    mock_post.side_effect = httpx.ConnectError("refused")
    client = PayoutClient(webhook_url="http://payout.test/hook")

    with pytest.raises(PayoutNotificationError):
        asyncio.run(client.send_withdrawal_event(PAYLOAD))

    assert mock_post.call_count == client.max_retries
