"""
CI Slack Notifier CLI

Runs one notifier step of a CI pipeline. Every option falls back to the
``INPUT_*`` variable the GitHub Actions runner exports for the action input
of the same name.

Usage:
    ci-notify --action start --channel ci --message-text "Deploy" --author alice
    ci-notify --action upload --channel ci --thread-id 169000.1
    ci-notify --action finish --channel ci --thread-id 169000.1 --status success
"""

import asyncio
import logging
import sys
from pathlib import Path

import click
from dotenv import load_dotenv

# Load .env file
load_dotenv()

from ..actions import set_failed, set_output
from ..config import (
    DEFAULT_SCREENSHOTS_DIR,
    DEFAULT_VIDEOS_DIR,
    NotifierConfig,
    RunContext,
    RunLink,
)
from ..errors import NotifierError
from ..notifier import Notifier
from ..slack.client import SlackGateway
from ..types import Mode

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool, quiet: bool = False):
    """Configure logging to output to stdout."""
    if quiet:
        level = logging.WARNING
    else:
        level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(message)s',  # Simple format for CLI
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )


def _strip(ctx, param, value):
    return value.strip() if isinstance(value, str) else value


@click.command()
@click.option('--action', envvar='INPUT_ACTION', required=True, callback=_strip,
              help='Mode to run: start, upload or finish')
@click.option('--token', envvar=['INPUT_TOKEN', 'SLACK_BOT_TOKEN'], required=True, callback=_strip,
              help='Slack bot token')
@click.option('--channel', envvar='INPUT_CHANNEL', required=True, callback=_strip,
              help='Channel name to post in')
@click.option('--author', envvar='INPUT_AUTHOR', default='', callback=_strip,
              help='Handle mentioned in messages')
@click.option('--screenshots', envvar='INPUT_SCREENSHOTS', default='', callback=_strip,
              help=f'Screenshot root directory (default: {DEFAULT_SCREENSHOTS_DIR})')
@click.option('--videos', envvar='INPUT_VIDEOS', default='', callback=_strip,
              help=f'Video root directory (default: {DEFAULT_VIDEOS_DIR})')
@click.option('--message-text', envvar='INPUT_MESSAGE-TEXT', default='', callback=_strip,
              help='Header text of the start/finish message')
@click.option('--thread-id', envvar='INPUT_THREAD-ID', default='', callback=_strip,
              help='Thread id returned by the start step (upload/finish)')
@click.option('--status', envvar='INPUT_STATUS', default='', callback=_strip,
              help='Run status for finish; "success" marks the run green')
@click.option('-v', '--verbose', is_flag=True, help='Verbose output (show DEBUG logs)')
@click.option('-q', '--quiet', is_flag=True, help='Quiet mode (only show warnings/errors)')
def cli(action, token, channel, author, screenshots, videos, message_text, thread_id, status, verbose, quiet):
    """Post CI run status and test artifacts to a Slack channel."""
    setup_logging(verbose, quiet)

    context = RunContext(
        action=action,
        token=token,
        channel=channel,
        author=author,
        message_text=message_text,
        thread_id=thread_id,
        status=status,
        screenshots_dir=Path(screenshots or DEFAULT_SCREENSHOTS_DIR),
        videos_dir=Path(videos or DEFAULT_VIDEOS_DIR),
        run_link=RunLink.from_env(),
    )

    logger.info("Action: %s", context.action)
    logger.info("Channel: %s", context.channel)
    logger.info("Message text: %s", context.message_text)
    logger.info("Author: %s", context.author)
    logger.info("Screenshots dir: %s", context.screenshots_dir)
    logger.info("Videos dir: %s", context.videos_dir)
    logger.info("Thread ID: %s", context.thread_id)

    try:
        result = asyncio.run(run_notifier(context))
    except NotifierError as e:
        set_failed(e.message)
        raise SystemExit(1)
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        set_failed(str(e) or e.__class__.__name__)
        raise SystemExit(1)

    logger.debug("Result: %s", result.to_dict())

    if result.mode == Mode.START:
        set_output('thread-id', result.thread_id)


async def run_notifier(context: RunContext):
    """Validate, build the Slack gateway and run the notifier."""
    context.validate()

    config = NotifierConfig.from_env()
    logger.info("Initializing slack SDK")
    gateway = SlackGateway(context.token, config)
    logger.info("Slack SDK initialized successfully")

    return await Notifier(context, gateway, config).run()


def main():
    cli()


if __name__ == '__main__':
    main()
