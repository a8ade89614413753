"""
Notifier Types

Data structures for run modes, status styling, artifacts and results.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .errors import ConfigurationError


class Mode(Enum):
    """Operating mode of a single invocation."""
    START = "start"
    UPLOAD = "upload"
    FINISH = "finish"

    @classmethod
    def parse(cls, action: str) -> "Mode":
        """Parse an action name case-insensitively."""
        try:
            return cls((action or "").strip().lower())
        except ValueError:
            raise ConfigurationError(f"Unknown action: {action}") from None

    @property
    def requires_thread(self) -> bool:
        """Upload and finish extend a message created by start."""
        return self in (Mode.UPLOAD, Mode.FINISH)


class ArtifactKind(Enum):
    """Category of a discovered artifact."""
    SCREENSHOT = "screenshot"
    VIDEO = "video"


@dataclass(frozen=True)
class StatusStyle:
    """Header icon, accent color and status label of a run message."""

    icon: str
    color: str
    label: str

    @classmethod
    def in_progress(cls) -> "StatusStyle":
        return cls(icon=":rocket:", color="#f2c744", label="In progress")

    @classmethod
    def for_status(cls, status: Optional[str]) -> "StatusStyle":
        """Only an exact ``success`` counts as a passing run."""
        label = status or ""
        if label == "success":
            return cls(icon=":ok_hand:", color="#64f244", label=label)
        return cls(icon=":poop:", color="#e30d0d", label=label)


@dataclass(frozen=True)
class ArtifactSet:
    """Files of one kind discovered under a root directory."""

    root: Path
    kind: ArtifactKind
    paths: Tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.paths)

    def __bool__(self) -> bool:
        return bool(self.paths)

    def absolute(self, relative_path: str) -> Path:
        """Resolve a relative artifact path against its root."""
        return self.root / relative_path


@dataclass
class NotifyResult:
    """Outcome of a single notifier invocation."""

    mode: Mode
    channel_id: str
    thread_id: Optional[str] = None
    screenshots_uploaded: int = 0
    videos_uploaded: int = 0
    skipped: bool = False

    @property
    def uploaded(self) -> int:
        """Total number of uploaded artifacts."""
        return self.screenshots_uploaded + self.videos_uploaded

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "mode": self.mode.value,
            "channel_id": self.channel_id,
            "thread_id": self.thread_id,
            "screenshots_uploaded": self.screenshots_uploaded,
            "videos_uploaded": self.videos_uploaded,
            "skipped": self.skipped,
        }
