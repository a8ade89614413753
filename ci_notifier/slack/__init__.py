"""
Slack Module

Provides the async Web API gateway and the run message builders.
"""

from .client import SlackGateway, describe_error
from .blocks import (
    build_start_attachment,
    build_finish_attachment,
    build_pointer_text,
)

__all__ = [
    'SlackGateway',
    'describe_error',
    'build_start_attachment',
    'build_finish_attachment',
    'build_pointer_text',
]
