"""
Slack Web API Gateway

Thin async wrapper around ``slack_sdk``'s AsyncWebClient exposing only the
calls the notifier needs, with every failure converted into RemoteError.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List, Optional

import aiohttp
from slack_sdk.errors import SlackApiError, SlackClientError
from slack_sdk.web.async_client import AsyncWebClient

from ..config import NotifierConfig
from ..errors import RemoteError

logger = logging.getLogger(__name__)

REMOTE_EXCEPTIONS = (
    SlackClientError,
    aiohttp.ClientError,
    asyncio.TimeoutError,
    OSError,
)


def describe_error(exc: BaseException) -> str:
    """Human-readable description of a failed Slack call."""
    if isinstance(exc, SlackApiError):
        response = getattr(exc, "response", None)
        error_code = response.get("error") if response is not None else None
        return f"An API error occurred: {error_code or exc}"
    return str(exc) or exc.__class__.__name__


class SlackGateway:
    """
    Async access to the Slack Web API.

    Usage:
        gateway = SlackGateway(token, NotifierConfig.from_env())
        channel_id = await gateway.find_channel_id("ci")
        ts = await gateway.post_message(channel_id, text="hello")
    """

    def __init__(
        self,
        token: str,
        config: Optional[NotifierConfig] = None,
        client: Optional[AsyncWebClient] = None,
    ):
        """
        Initialize the gateway.

        Args:
            token: Slack bot token, passed through unchanged
            config: NotifierConfig with timeout and pagination settings
            client: Pre-built client (tests inject a mock here)
        """
        self.config = config or NotifierConfig.from_env()
        self.client = client or AsyncWebClient(
            token=token,
            timeout=self.config.slack_timeout,
            base_url=self.config.slack_base_url,
        )

    @asynccontextmanager
    async def _remote_call(self, method: str) -> AsyncIterator[None]:
        logger.debug("Calling Slack %s", method)
        try:
            yield
        except REMOTE_EXCEPTIONS as e:
            logger.debug("Slack %s failed: %s", method, e)
            raise RemoteError(describe_error(e)) from e

    async def find_channel_id(self, name: str) -> Optional[str]:
        """
        Look up a channel id by exact name.

        Follows the listing cursor until the channel is found or the pages
        run out, unless pagination is disabled in the config.

        Returns:
            The channel id, or None if no visible channel has that name
        """
        cursor = None
        while True:
            params: Dict[str, Any] = {"limit": self.config.channel_page_size}
            if cursor:
                params["cursor"] = cursor

            async with self._remote_call("conversations.list"):
                response = await self.client.conversations_list(**params)

            channels = response.get("channels") or []
            for channel in channels:
                if channel.get("name") == name:
                    return channel.get("id")

            metadata = response.get("response_metadata") or {}
            cursor = metadata.get("next_cursor")
            if not cursor or not self.config.paginate_channels:
                return None
            logger.debug("Channel %s not on this page, fetching next", name)

    async def post_message(
        self,
        channel: str,
        text: Optional[str] = None,
        attachments: Optional[List[Dict[str, Any]]] = None,
        thread_ts: Optional[str] = None,
        mrkdwn: Optional[bool] = None,
    ) -> str:
        """
        Post a message, optionally into a thread.

        Returns:
            The ``ts`` of the new message
        """
        kwargs: Dict[str, Any] = {"channel": channel, "link_names": True}
        if text is not None:
            kwargs["text"] = text
        if attachments is not None:
            kwargs["attachments"] = attachments
        if thread_ts:
            kwargs["thread_ts"] = thread_ts
        if mrkdwn is not None:
            kwargs["mrkdwn"] = mrkdwn

        async with self._remote_call("chat.postMessage"):
            response = await self.client.chat_postMessage(**kwargs)
        return response["ts"]

    async def update_message(
        self,
        channel: str,
        ts: str,
        attachments: List[Dict[str, Any]],
    ) -> None:
        """Replace the attachments of an existing message."""
        kwargs: Dict[str, Any] = {
            "channel": channel,
            "ts": ts,
            "link_names": True,
            "attachments": attachments,
        }
        async with self._remote_call("chat.update"):
            await self.client.chat_update(**kwargs)

    async def upload_file(
        self,
        channel: str,
        thread_ts: str,
        path: Path,
        filename: str,
    ) -> None:
        """Upload a local file and share it into a thread."""
        async with self._remote_call("files.upload"):
            await self.client.files_upload_v2(
                channel=channel,
                thread_ts=thread_ts,
                file=str(path),
                filename=filename,
                title=filename,
            )
