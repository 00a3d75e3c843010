"""Jinja filters and small view helpers for the dashboard templates."""

from dataclasses import dataclass
from urllib.parse import quote, urlparse

from sentix.sentiment.schemas import Source


@dataclass(frozen=True)
class PlatformBar:
    label: str
    score: int
    width_pct: float
    offset_pct: float

    @property
    def positive(self) -> bool:
        return self.score >= 0


def signed(value: float) -> str:
    if value > 0:
        return f"+{value:g}"
    return f"{value:g}"


def compact_volume(volume: int) -> str:
    return f"{volume / 1000:.1f}k"


def thousands(value: int) -> str:
    return f"{value:,}"


def source_domain(source: Source) -> str:
    if source.domain:
        return source.domain
    host = urlparse(source.url).hostname or source.url
    return host.removeprefix("www.")


def rank_trend(rank_change: int) -> str:
    if rank_change > 0:
        return "up"
    if rank_change < 0:
        return "down"
    return "flat"


def platform_bar(label: str, score: int) -> PlatformBar:
    # Bars grow out of the centre line; half the track per 100 points.
    width = abs(score) / 2
    offset = 50.0 if score >= 0 else 50.0 - width
    return PlatformBar(label=label, score=score, width_pct=width, offset_pct=offset)


def path_segment(value: str) -> str:
    return quote(value, safe="")


def register_filters(env) -> None:
    env.filters["signed"] = signed
    env.filters["compact_volume"] = compact_volume
    env.filters["thousands"] = thousands
    env.filters["source_domain"] = source_domain
    env.filters["rank_trend"] = rank_trend
    env.filters["path_segment"] = path_segment
