"""Shared pytest fixtures for CI Slack Notifier tests."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from ci_notifier.config import NotifierConfig, RunContext, RunLink


@pytest.fixture
def run_link():
    """Run coordinates of a GitHub Actions run."""
    return RunLink(
        server_url='https://github.com',
        repository='acme/webapp',
        run_id='4242',
    )


@pytest.fixture
def make_context(run_link, tmp_path):
    """Factory for RunContext with sensible test defaults."""
    def _make(**overrides):
        values = dict(
            action='start',
            token='xoxb-test',
            channel='ci',
            author='alice',
            message_text='Deploy',
            thread_id='',
            status='',
            screenshots_dir=tmp_path / 'screenshots',
            videos_dir=tmp_path / 'videos',
            run_link=run_link,
        )
        values.update(overrides)
        return RunContext(**values)
    return _make


@pytest.fixture
def mock_gateway():
    """Create a mock Slack gateway with async methods."""
    gateway = MagicMock()
    gateway.config = NotifierConfig()
    gateway.find_channel_id = AsyncMock(return_value='C0CI')
    gateway.post_message = AsyncMock(return_value='1690000000.000100')
    gateway.update_message = AsyncMock(return_value=None)
    gateway.upload_file = AsyncMock(return_value=None)
    return gateway


@pytest.fixture
def mock_slack_client():
    """Create a mock AsyncWebClient."""
    client = MagicMock()
    client.conversations_list = AsyncMock()
    client.chat_postMessage = AsyncMock(return_value={'ok': True, 'ts': '1690000000.000100'})
    client.chat_update = AsyncMock(return_value={'ok': True})
    client.files_upload_v2 = AsyncMock(return_value={'ok': True})
    return client


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b'\x00')
    return path


@pytest.fixture
def artifact_tree(tmp_path):
    """
    Cypress-style artifact directories.

    screenshots/ holds three PNGs across nested test-file folders plus noise;
    videos/ holds two MP4s.
    """
    screenshots = tmp_path / 'screenshots'
    videos = tmp_path / 'videos'

    _touch(screenshots / 'login.cy.ts' / 'login fails (failed).png')
    _touch(screenshots / 'login.cy.ts' / 'login works.png')
    _touch(screenshots / 'cart' / 'checkout.cy.ts' / 'empty cart.png')
    _touch(screenshots / 'notes.txt')
    _touch(screenshots / 'upper.PNG')

    _touch(videos / 'login.cy.ts.mp4')
    _touch(videos / 'cart' / 'checkout.cy.ts.mp4')
    _touch(videos / 'checkout.cy.ts.mp4.log')

    return tmp_path
