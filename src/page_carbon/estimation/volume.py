"""Data volume estimation for page content."""

from __future__ import annotations

from page_carbon.model_profile import DEFAULT_PROFILE, ModelProfile
from page_carbon.types import ContentType, Site


def estimate_data_volume(
    content_type: ContentType,
    duration_seconds: float,
    optimize_video: bool,
    site: Site = Site.DEFAULT,
    *,
    profile: ModelProfile = DEFAULT_PROFILE,
) -> float:
    """Estimate the bytes transferred for a piece of content.

    Text pages have a fixed payload regardless of ``duration_seconds``.
    Audio and video stream at a constant bitrate; video uses the optimised
    bitrate when ``optimize_video`` is set, otherwise the site's measured
    bitrate, falling back to the generic one.

    Args:
        content_type: Kind of content consumed.
        duration_seconds: Playback time in seconds.
        optimize_video: Serve video at the optimised bitrate.
        site: Content source used for the measured video bitrate.
        profile: Constant table to read bitrates from.

    Returns:
        Estimated volume in bytes.

    Raises:
        ValueError: ``duration_seconds`` is negative, or ``content_type`` or
            ``site`` is not a known value.
    """

    if duration_seconds < 0:
        raise ValueError("duration_seconds must be >= 0")

    content_type = ContentType(content_type)
    site = Site(site)
    if content_type is ContentType.AUDIO:
        return duration_seconds * profile.audio_bytes_per_second
    if content_type is ContentType.VIDEO:
        return duration_seconds * profile.video_bitrate(site, optimize_video)
    return profile.text_page_bytes
