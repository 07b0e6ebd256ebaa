#!/usr/bin/env python3
"""
verify_links.py - Check that external media links in transcription courses still resolve

For every Track passage with an external link, ask the provider's oembed
endpoint about the video. A 200 means the link is valid; any other status,
or a transport failure, means it is not. There are no retries: this is a
one-shot check meant for periodic manual runs.

Usage:
    transcription-cli verify-links

Output:
    One line per invalid link, naming the course and the asset, or a single
    "All links are valid." line when nothing failed.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

import click
import requests

from transcription_cli.config_utils import DEFAULT_OEMBED_URL
from transcription_cli.course_library import CourseLibrary
from transcription_cli.course_tree import iter_transcription_configs
from transcription_cli.errors import LinkInvalidError, link_invalid_error
from transcription_cli.manifest import ExternalLink, TrackAsset, YouTubeLink


logger = logging.getLogger(__name__)

YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
ALL_VALID_MESSAGE = "All links are valid."


@dataclass(frozen=True)
class LinkCheckResult:
    """Outcome of checking one asset's link"""
    course_id: str
    asset_id: str
    valid: bool


@dataclass
class LinkValidationSummary:
    """Results from one verify-links run"""
    results: List[LinkCheckResult] = field(default_factory=list)

    @property
    def invalid(self) -> List[LinkCheckResult]:
        return [r for r in self.results if not r.valid]

    @property
    def invalid_count(self) -> int:
        return len(self.invalid)

    @property
    def all_valid(self) -> bool:
        return self.invalid_count == 0


def check_link(
    link: ExternalLink,
    timeout: Optional[float] = None,
    oembed_url: str = DEFAULT_OEMBED_URL,
) -> None:
    """
    Confirm that an external link still exists.

    Args:
        link: Link to check
        timeout: Seconds before giving up (None keeps the requests default)
        oembed_url: Endpoint to query

    Raises:
        LinkInvalidError: The provider did not answer 200, the request failed,
            or the link kind cannot be checked
    """
    if not isinstance(link, YouTubeLink):
        raise LinkInvalidError(
            message=f"Cannot check links of kind {link.kind}",
            context={"kind": link.kind},
        )

    watch_url = YOUTUBE_WATCH_URL.format(video_id=link.video_id)
    params = {"url": watch_url, "format": "json"}
    logger.debug("Checking %s", watch_url)

    try:
        response = requests.get(oembed_url, params=params, timeout=timeout)
    except requests.RequestException as e:
        logger.debug("Request for %s failed: %s", watch_url, e)
        raise link_invalid_error(link.video_id, watch_url, cause=e)

    if response.status_code != 200:
        logger.debug("%s answered %s", watch_url, response.status_code)
        raise link_invalid_error(link.video_id, watch_url, status_code=response.status_code)


def _linked_tracks(library: CourseLibrary) -> List[Tuple[str, TrackAsset]]:
    """(course_id, track) for every track with a link, in course order."""
    tracks = []
    for course_id, config in iter_transcription_configs(library):
        for passage in config.inlined_passages:
            asset = passage.asset
            if isinstance(asset, TrackAsset) and asset.external_link is not None:
                tracks.append((course_id, asset))
    return tracks


def validate_all_links(
    library: CourseLibrary,
    workers: int = 1,
    timeout: Optional[float] = None,
    oembed_url: str = DEFAULT_OEMBED_URL,
    echo: Callable[[str], None] = click.echo,
) -> LinkValidationSummary:
    """
    Check every linked track in the library and report invalid links.

    Checks may run on a thread pool when workers > 1; results are gathered
    in submission order and reported afterwards from this thread, so the
    output always follows course order.

    Args:
        library: Loaded course library
        workers: Number of concurrent checks
        timeout: Per-request timeout in seconds
        oembed_url: Endpoint to query
        echo: Where report lines go

    Returns:
        LinkValidationSummary with one result per checked asset
    """
    tracks = _linked_tracks(library)
    logger.info("Checking %d link(s)", len(tracks))

    def is_valid(track: Tuple[str, TrackAsset]) -> bool:
        course_id, asset = track
        try:
            check_link(asset.external_link, timeout=timeout, oembed_url=oembed_url)
        except LinkInvalidError as e:
            logger.debug("Invalid link in %s/%s: %s", course_id, asset.short_id, e.message)
            return False
        return True

    if workers > 1 and len(tracks) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            outcomes = list(executor.map(is_valid, tracks))
    else:
        outcomes = [is_valid(track) for track in tracks]

    summary = LinkValidationSummary()
    for (course_id, asset), valid in zip(tracks, outcomes):
        summary.results.append(LinkCheckResult(course_id=course_id, asset_id=asset.short_id, valid=valid))
        if not valid:
            echo(f"Invalid link for course {course_id} and asset {asset.short_id}")

    if summary.all_valid:
        echo(ALL_VALID_MESSAGE)
    return summary
