"""Tests for the Slack Web API gateway (slack/client.py)."""

from pathlib import Path

import aiohttp
import pytest
from slack_sdk.errors import SlackApiError

from ci_notifier.config import NotifierConfig
from ci_notifier.errors import RemoteError
from ci_notifier.slack.client import SlackGateway, describe_error


def _page(names, next_cursor=""):
    return {
        "ok": True,
        "channels": [{"id": f"C_{name.upper()}", "name": name} for name in names],
        "response_metadata": {"next_cursor": next_cursor},
    }


@pytest.fixture
def gateway(mock_slack_client):
    return SlackGateway("xoxb-test", NotifierConfig(), client=mock_slack_client)


class TestDescribeError:
    def test_api_error_uses_error_code(self):
        exc = SlackApiError("The request failed", {"ok": False, "error": "channel_not_found"})
        assert describe_error(exc) == "An API error occurred: channel_not_found"

    def test_transport_error(self):
        assert describe_error(aiohttp.ClientConnectionError("connection reset")) == "connection reset"

    def test_empty_message_falls_back_to_type(self):
        assert describe_error(TimeoutError()) == "TimeoutError"


class TestFindChannelId:
    @pytest.mark.asyncio
    async def test_found_on_first_page(self, gateway, mock_slack_client):
        mock_slack_client.conversations_list.return_value = _page(["general", "ci"])

        assert await gateway.find_channel_id("ci") == "C_CI"
        mock_slack_client.conversations_list.assert_awaited_once_with(limit=200)

    @pytest.mark.asyncio
    async def test_exact_case_sensitive_match(self, gateway, mock_slack_client):
        mock_slack_client.conversations_list.return_value = _page(["CI", "ci-nightly"])

        assert await gateway.find_channel_id("ci") is None

    @pytest.mark.asyncio
    async def test_follows_cursor(self, gateway, mock_slack_client):
        mock_slack_client.conversations_list.side_effect = [
            _page(["general"], next_cursor="page2"),
            _page(["random", "ci"]),
        ]

        assert await gateway.find_channel_id("ci") == "C_CI"
        assert mock_slack_client.conversations_list.await_count == 2
        second_call = mock_slack_client.conversations_list.await_args_list[1]
        assert second_call.kwargs == {"limit": 200, "cursor": "page2"}

    @pytest.mark.asyncio
    async def test_stops_when_pages_run_out(self, gateway, mock_slack_client):
        mock_slack_client.conversations_list.side_effect = [
            _page(["general"], next_cursor="page2"),
            _page(["random"]),
        ]

        assert await gateway.find_channel_id("ci") is None
        assert mock_slack_client.conversations_list.await_count == 2

    @pytest.mark.asyncio
    async def test_single_page_when_pagination_disabled(self, mock_slack_client):
        gateway = SlackGateway(
            "xoxb-test",
            NotifierConfig(paginate_channels=False, channel_page_size=100),
            client=mock_slack_client,
        )
        mock_slack_client.conversations_list.return_value = _page(["general"], next_cursor="page2")

        assert await gateway.find_channel_id("ci") is None
        mock_slack_client.conversations_list.assert_awaited_once_with(limit=100)

    @pytest.mark.asyncio
    async def test_api_error_becomes_remote_error(self, gateway, mock_slack_client):
        mock_slack_client.conversations_list.side_effect = SlackApiError(
            "The request failed", {"ok": False, "error": "invalid_auth"}
        )

        with pytest.raises(RemoteError, match="An API error occurred: invalid_auth"):
            await gateway.find_channel_id("ci")


class TestPostMessage:
    @pytest.mark.asyncio
    async def test_returns_ts(self, gateway, mock_slack_client):
        ts = await gateway.post_message("C_CI", attachments=[{"color": "#f2c744"}])

        assert ts == "1690000000.000100"
        mock_slack_client.chat_postMessage.assert_awaited_once_with(
            channel="C_CI",
            link_names=True,
            attachments=[{"color": "#f2c744"}],
        )

    @pytest.mark.asyncio
    async def test_thread_reply(self, gateway, mock_slack_client):
        await gateway.post_message("C_CI", text="hi", thread_ts="169000.1", mrkdwn=True)

        mock_slack_client.chat_postMessage.assert_awaited_once_with(
            channel="C_CI",
            link_names=True,
            text="hi",
            thread_ts="169000.1",
            mrkdwn=True,
        )

    @pytest.mark.asyncio
    async def test_transport_error(self, gateway, mock_slack_client):
        mock_slack_client.chat_postMessage.side_effect = aiohttp.ClientConnectionError("boom")

        with pytest.raises(RemoteError, match="boom") as exc_info:
            await gateway.post_message("C_CI", text="hi")
        assert isinstance(exc_info.value.__cause__, aiohttp.ClientConnectionError)


class TestUpdateMessage:
    @pytest.mark.asyncio
    async def test_update(self, gateway, mock_slack_client):
        await gateway.update_message("C_CI", "169000.1", attachments=[{"color": "#e30d0d"}])

        mock_slack_client.chat_update.assert_awaited_once_with(
            channel="C_CI",
            ts="169000.1",
            link_names=True,
            attachments=[{"color": "#e30d0d"}],
        )

    @pytest.mark.asyncio
    async def test_message_not_found(self, gateway, mock_slack_client):
        mock_slack_client.chat_update.side_effect = SlackApiError(
            "The request failed", {"ok": False, "error": "message_not_found"}
        )

        with pytest.raises(RemoteError, match="message_not_found"):
            await gateway.update_message("C_CI", "169000.1", attachments=[])


class TestUploadFile:
    @pytest.mark.asyncio
    async def test_upload(self, gateway, mock_slack_client):
        await gateway.upload_file(
            "C_CI", "169000.1", Path("cypress/videos/cart/checkout.mp4"), "cart/checkout.mp4"
        )

        mock_slack_client.files_upload_v2.assert_awaited_once_with(
            channel="C_CI",
            thread_ts="169000.1",
            file="cypress/videos/cart/checkout.mp4",
            filename="cart/checkout.mp4",
            title="cart/checkout.mp4",
        )

    @pytest.mark.asyncio
    async def test_unreadable_file(self, gateway, mock_slack_client):
        mock_slack_client.files_upload_v2.side_effect = FileNotFoundError("no such file: a.png")

        with pytest.raises(RemoteError, match="no such file"):
            await gateway.upload_file("C_CI", "169000.1", Path("a.png"), "a.png")
