"""
Slack Block Kit Message Builders

Creates the run status attachment shared by the start and finish messages.
"""

from typing import Any, Dict, List

from ..config import RunLink
from ..types import StatusStyle


def _header(text: str) -> Dict[str, Any]:
    """Create a header block."""
    return {
        "type": "header",
        "text": {"type": "plain_text", "text": text, "emoji": True},
    }


def _field(text: str) -> Dict[str, str]:
    """Create a markdown field for a section block."""
    return {"type": "mrkdwn", "text": text}


def _fields_section(fields: List[str]) -> Dict[str, Any]:
    """Create a section block laid out as fields."""
    return {
        "type": "section",
        "fields": [_field(f) for f in fields],
    }


def run_url_field(run_link: RunLink) -> str:
    """Markdown link to the CI run."""
    return f"*Run URL:* <{run_link.url}|Click!>"


def build_run_blocks(
    message_text: str,
    style: StatusStyle,
    run_link: RunLink,
    author: str,
) -> List[Dict[str, Any]]:
    """
    Build Block Kit blocks for a run status message.

    Args:
        message_text: Run description shown in the header
        style: Icon and status label to display
        run_link: CI run coordinates for the Run URL field
        author: Handle mentioned in the Author field

    Returns:
        List of Block Kit blocks
    """
    return [
        _header(f"{style.icon} {message_text}"),
        _fields_section([
            run_url_field(run_link),
            f"*Status:* {style.label}",
            f"*Author:* @{author}",
        ]),
    ]


def build_run_attachment(
    message_text: str,
    style: StatusStyle,
    run_link: RunLink,
    author: str,
) -> List[Dict[str, Any]]:
    """
    Wrap the run blocks in a colored attachment.

    Returns:
        Attachments list ready for chat.postMessage / chat.update
    """
    return [
        {
            "color": style.color,
            "fallback": f"{style.icon} {message_text}",
            "blocks": build_run_blocks(message_text, style, run_link, author),
        }
    ]


def build_start_attachment(message_text: str, run_link: RunLink, author: str) -> List[Dict[str, Any]]:
    """Attachment announcing a run in progress."""
    return build_run_attachment(message_text, StatusStyle.in_progress(), run_link, author)


def build_finish_attachment(
    message_text: str,
    status: str,
    run_link: RunLink,
    author: str,
) -> List[Dict[str, Any]]:
    """Attachment replacing the start message once the run has finished."""
    return build_run_attachment(message_text, StatusStyle.for_status(status), run_link, author)


def build_pointer_text(author: str) -> str:
    """Plain text posted in the thread before artifacts are uploaded."""
    return f"@{author} check this out :point_down:"
