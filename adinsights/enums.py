from __future__ import annotations

from enum import Enum


class Platform(str, Enum):
    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"
    AUDIENCE_NETWORK = "audience_network"
    MESSENGER = "messenger"
    UNKNOWN = "unknown"


# Canonical order, also used for grouping and chart options.
KNOWN_PLATFORMS = (
    Platform.FACEBOOK,
    Platform.INSTAGRAM,
    Platform.AUDIENCE_NETWORK,
    Platform.MESSENGER,
)


class Trend(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class DescriptionFormat(str, Enum):
    PLAIN = "plain"
    MARKDOWN = "markdown"
    HTML = "html"


class GroupKey(str, Enum):
    ALL = "all"
    DAY = "day"
    PLATFORM = "platform"
