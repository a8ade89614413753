"""Artifact Discovery - Finds test screenshots and videos to attach to a run thread."""

import logging
from pathlib import Path
from typing import Tuple, Union

from .types import ArtifactKind, ArtifactSet

logger = logging.getLogger(__name__)

SCREENSHOT_PATTERN = '*.png'
VIDEO_PATTERN = '*.mp4'


def discover(root: Union[str, Path], pattern: str, kind: ArtifactKind) -> ArtifactSet:
    """
    Recursively find files under root whose name matches pattern.

    Args:
        root: Directory to walk; a missing directory yields an empty set
        pattern: Glob matched against file names in every subdirectory
        kind: Artifact category recorded on the result

    Returns:
        ArtifactSet with sorted POSIX paths relative to root
    """
    root = Path(root)
    if not root.is_dir():
        logger.debug("Artifact root %s does not exist, skipping", root)
        return ArtifactSet(root=root, kind=kind)

    paths = sorted(
        p.relative_to(root).as_posix()
        for p in root.rglob(pattern)
        if p.is_file()
    )
    logger.debug("Found %d %s files under %s", len(paths), kind.value, root)
    return ArtifactSet(root=root, kind=kind, paths=tuple(paths))


def discover_screenshots(root: Union[str, Path]) -> ArtifactSet:
    return discover(root, SCREENSHOT_PATTERN, ArtifactKind.SCREENSHOT)


def discover_videos(root: Union[str, Path]) -> ArtifactSet:
    return discover(root, VIDEO_PATTERN, ArtifactKind.VIDEO)


def discover_all(screenshots_dir: Union[str, Path], videos_dir: Union[str, Path]) -> Tuple[ArtifactSet, ArtifactSet]:
    """Discover screenshots and videos, in upload order."""
    return discover_screenshots(screenshots_dir), discover_videos(videos_dir)
