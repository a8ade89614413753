"""
CI Run Notifier

Posts a run-started message, attaches test artifacts to its thread, and
rewrites it with the final status once the run is over.
"""

import asyncio
import logging
from typing import Any, Awaitable, Iterable, List, Optional

from .artifacts import discover_all
from .config import NotifierConfig, RunContext
from .errors import ChannelNotFoundError, ChannelResolutionError, RemoteError
from .monitoring import StepTracker
from .slack.blocks import (
    build_finish_attachment,
    build_pointer_text,
    build_start_attachment,
)
from .slack.client import SlackGateway
from .types import ArtifactSet, Mode, NotifyResult

logger = logging.getLogger(__name__)


async def gather_or_cancel(aws: Iterable[Awaitable[Any]]) -> List[Any]:
    """
    Run awaitables concurrently; the first failure cancels the rest.

    Returns:
        Results in input order

    Raises:
        The exception of the earliest (in input order) failed awaitable
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    if not tasks:
        return []

    done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    failed = [t for t in tasks if t in done and not t.cancelled() and t.exception() is not None]
    if failed:
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        raise failed[0].exception()

    return [t.result() for t in tasks]


class Notifier:
    """
    Runs one notifier mode against Slack.

    Usage:
        context = RunContext(action="start", token=token, channel="ci", ...)
        notifier = Notifier(context, SlackGateway(context.token))
        result = await notifier.run()
    """

    def __init__(
        self,
        context: RunContext,
        gateway: SlackGateway,
        config: Optional[NotifierConfig] = None,
    ):
        self.context = context
        self.gateway = gateway
        self.config = config or gateway.config

    async def run(self) -> NotifyResult:
        """
        Validate the inputs, resolve the channel and run the selected mode.

        Raises:
            ConfigurationError: before any Slack call when inputs are invalid
            ChannelResolutionError: when the channel cannot be resolved
            RemoteError: when posting, updating or uploading fails
        """
        mode = self.context.validate()
        channel_id = await self.resolve_channel()

        if mode == Mode.START:
            return await self.start(channel_id)
        elif mode == Mode.FINISH:
            return await self.finish(channel_id)
        return await self.upload(channel_id)

    async def resolve_channel(self) -> str:
        """Map the configured channel name to its Slack id."""
        name = self.context.channel
        lookup = name[1:] if name.startswith("#") else name

        try:
            channel_id = await self.gateway.find_channel_id(lookup)
        except RemoteError as e:
            raise ChannelResolutionError(f"Failed to fetch channel ID: {e.message}") from e

        if not channel_id:
            raise ChannelNotFoundError(name)

        logger.debug("Resolved channel %s to %s", name, channel_id)
        return channel_id

    async def start(self, channel_id: str) -> NotifyResult:
        """Post the run-started message; its ts becomes the thread id."""
        ctx = self.context
        thread_id = await self.gateway.post_message(
            channel_id,
            attachments=build_start_attachment(ctx.message_text, ctx.run_link, ctx.author),
        )
        logger.info("Posted start message %s", thread_id)
        return NotifyResult(mode=Mode.START, channel_id=channel_id, thread_id=thread_id)

    async def finish(self, channel_id: str) -> NotifyResult:
        """Rewrite the start message with the reported status."""
        ctx = self.context
        await self.gateway.update_message(
            channel_id,
            ctx.thread_id,
            attachments=build_finish_attachment(ctx.message_text, ctx.status, ctx.run_link, ctx.author),
        )
        logger.info("Updated message %s with status %r", ctx.thread_id, ctx.status)
        return NotifyResult(mode=Mode.FINISH, channel_id=channel_id, thread_id=ctx.thread_id)

    async def upload(self, channel_id: str) -> NotifyResult:
        """Attach screenshots, then videos, to the run thread."""
        ctx = self.context

        logger.info("Checking for videos and/or screenshots")
        screenshots, videos = discover_all(ctx.screenshots_dir, ctx.videos_dir)

        if not screenshots and not videos:
            logger.info("No videos or screenshots found. Exiting!")
            return NotifyResult(
                mode=Mode.UPLOAD,
                channel_id=channel_id,
                thread_id=ctx.thread_id,
                skipped=True,
            )

        await self.gateway.post_message(
            channel_id,
            text=build_pointer_text(ctx.author),
            thread_ts=ctx.thread_id,
            mrkdwn=True,
        )

        logger.info("Found %d videos and %d screenshots", len(videos), len(screenshots))

        screenshots_uploaded = await self._upload_group(channel_id, screenshots)
        videos_uploaded = await self._upload_group(channel_id, videos)

        return NotifyResult(
            mode=Mode.UPLOAD,
            channel_id=channel_id,
            thread_id=ctx.thread_id,
            screenshots_uploaded=screenshots_uploaded,
            videos_uploaded=videos_uploaded,
        )

    async def _upload_group(self, channel_id: str, artifacts: ArtifactSet) -> int:
        if not artifacts:
            return 0

        label = f"{artifacts.kind.value}s"
        logger.info("Uploading %d %s", len(artifacts), label)

        with StepTracker(f"upload {label}", self.config.upload_warn_seconds):
            await gather_or_cancel(
                self._upload_one(channel_id, artifacts, path) for path in artifacts.paths
            )

        logger.info("...done!")
        return len(artifacts)

    async def _upload_one(self, channel_id: str, artifacts: ArtifactSet, relative_path: str) -> None:
        logger.info("Uploading %s", relative_path)
        await self.gateway.upload_file(
            channel_id,
            self.context.thread_id,
            artifacts.absolute(relative_path),
            relative_path,
        )
