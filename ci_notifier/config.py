"""
Notifier Configuration

Loads run inputs and Slack client settings from the CI environment.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from .errors import ConfigurationError
from .types import Mode

DEFAULT_SCREENSHOTS_DIR = 'cypress/screenshots'
DEFAULT_VIDEOS_DIR = 'cypress/videos'


def _env_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value == '':
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class NotifierConfig:
    """Settings for the Slack client and upload monitoring."""

    slack_timeout: int = 30
    slack_base_url: str = 'https://slack.com/api/'
    channel_page_size: int = 200
    paginate_channels: bool = True
    upload_warn_seconds: float = 120.0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'NotifierConfig':
        """Create config from environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            slack_timeout=int(env.get('SLACK_API_TIMEOUT', 30)),
            slack_base_url=env.get('SLACK_API_URL', 'https://slack.com/api/'),
            channel_page_size=int(env.get('SLACK_CHANNEL_PAGE_SIZE', 200)),
            paginate_channels=_env_bool(env.get('SLACK_CHANNEL_PAGINATE'), True),
            upload_warn_seconds=float(env.get('UPLOAD_WARN_SECONDS', 120)),
        )


@dataclass(frozen=True)
class RunLink:
    """Components of the clickable CI run URL."""

    server_url: str = ''
    repository: str = ''
    run_id: str = ''

    @property
    def url(self) -> str:
        return f"{self.server_url}/{self.repository}/actions/runs/{self.run_id}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'RunLink':
        """Read the GitHub Actions run coordinates."""
        env = os.environ if environ is None else environ
        return cls(
            server_url=env.get('GITHUB_SERVER_URL', ''),
            repository=env.get('GITHUB_REPOSITORY', ''),
            run_id=env.get('GITHUB_RUN_ID', ''),
        )


@dataclass(frozen=True)
class RunContext:
    """
    Inputs of a single notifier invocation.

    Built once from CLI options (or the Actions ``INPUT_*`` variables) and
    never mutated afterwards.
    """

    action: str
    token: str
    channel: str
    author: str = ''
    message_text: str = ''
    thread_id: str = ''
    status: str = ''
    screenshots_dir: Path = Path(DEFAULT_SCREENSHOTS_DIR)
    videos_dir: Path = Path(DEFAULT_VIDEOS_DIR)
    run_link: RunLink = field(default_factory=RunLink)

    @property
    def mode(self) -> Mode:
        return Mode.parse(self.action)

    def validate(self) -> Mode:
        """
        Check the preconditions of the selected mode.

        Returns:
            The parsed Mode

        Raises:
            ConfigurationError: on an unknown action or a missing thread id
        """
        mode = self.mode
        if not self.channel:
            raise ConfigurationError("Channel name is required.")
        if mode.requires_thread and not self.thread_id:
            raise ConfigurationError(f"Action: {self.action} requires thread-id.")
        return mode
