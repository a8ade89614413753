"""CI Slack Notifier - Main package.

Posts CI run status to Slack and attaches test artifacts to the run thread.

Modules:
    config - Run inputs and Slack client settings
    types - Modes, status styles, artifact sets, results
    errors - Configuration and remote error hierarchy
    artifacts - Screenshot and video discovery
    slack - Slack gateway and message builders
    notifier - Start/upload/finish modes
    actions - GitHub Actions outputs and failure annotations
"""

from .config import NotifierConfig, RunContext, RunLink
from .errors import (
    ChannelNotFoundError,
    ChannelResolutionError,
    ConfigurationError,
    NotifierError,
    RemoteError,
)
from .notifier import Notifier
from .types import Mode, NotifyResult

__all__ = [
    'NotifierConfig',
    'RunContext',
    'RunLink',
    'NotifierError',
    'ConfigurationError',
    'RemoteError',
    'ChannelResolutionError',
    'ChannelNotFoundError',
    'Notifier',
    'Mode',
    'NotifyResult',
]

__version__ = '1.0.0'
