"""
Typed records decoded from Veo API responses.

The API is only partially documented and several fields change shape between
endpoints (``team`` can be a string, an object or missing; ``info`` and
``permissions`` hold nested server-controlled data). Decoding therefore reads
every field leniently: a missing or oddly shaped value becomes ``None`` (or a
neutral default) instead of an error. Only a payload whose top-level shape is
wrong raises ``DecodeError``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

from veo.exceptions import DecodeError

logger = logging.getLogger(__name__)


def dig(value: Any, *keys: str) -> Any:
    """Walk nested JSON objects, returning None as soon as a key is missing"""
    for key in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    try:
        if isinstance(value, int | float):
            return int(value)
        if isinstance(value, str):
            return int(float(value))
    except (ValueError, OverflowError):
        pass
    return 0


def _as_bool(value: Any) -> bool:
    return value if isinstance(value, bool) else bool(value)


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float) and math.isfinite(value):
        return value
    return None


def _as_datetime(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp; unparsable values become None"""
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug(f"Ignoring unparsable timestamp {value!r}")
        return None


def _require_object(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(
            f"failed to decode {what}",
            details=f"expected a JSON object, got {type(data).__name__}",
        )
    return data


def _require_list(data: Any, what: str) -> list[Any]:
    if not isinstance(data, list):
        raise DecodeError(
            f"failed to decode {what}",
            details=f"expected a JSON array, got {type(data).__name__}",
        )
    return data


def _serialize(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _serialize(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_serialize(v) for v in value]
    return value


def team_label(team: Any) -> str:
    """Human label for the polymorphic ``team`` field"""
    if isinstance(team, str):
        return team
    if isinstance(team, dict):
        for key in ("name", "title", "slug", "id"):
            label = team.get(key)
            if isinstance(label, str | int) and not isinstance(label, bool) and label != "":
                return str(label)
    return ""


@dataclass(frozen=True)
class Recording:
    """A recording as returned by the club recordings list endpoint"""

    identifier: str = ""
    slug: str = ""
    title: str = ""
    created: datetime | None = None
    start: datetime | None = None
    duration: int = 0
    camera: str = ""
    url: str = ""
    thumbnail: str = ""
    reel_url: str = ""
    team: Any = None
    privacy: Any = None
    permissions: Any = None
    is_accessible: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> Recording:
        data = _require_object(data, "recording")
        return cls(**_recording_fields(data))

    @property
    def team_name(self) -> str:
        return team_label(self.team)

    def to_dict(self) -> dict[str, Any]:
        return {k: _serialize(v) for k, v in asdict(self).items()}


def _recording_fields(data: dict[str, Any]) -> dict[str, Any]:
    return {
        "identifier": _as_str(data.get("identifier")),
        "slug": _as_str(data.get("slug")),
        "title": _as_str(data.get("title")),
        "created": _as_datetime(data.get("created")),
        "start": _as_datetime(data.get("start")),
        "duration": _as_int(data.get("duration")),
        "camera": _as_str(data.get("camera")),
        "url": _as_str(data.get("url")),
        "thumbnail": _as_str(data.get("thumbnail")),
        "reel_url": _as_str(data.get("reel_url")),
        "team": data.get("team"),
        "privacy": data.get("privacy"),
        "permissions": data.get("permissions"),
        "is_accessible": _as_bool(data.get("is_accessible")),
    }


@dataclass(frozen=True)
class RecordingDetails(Recording):
    """A single recording ("match") with its match metadata"""

    type: str = ""
    end: datetime | None = None
    own_team_home_or_away: str = ""
    own_team_color: str = ""
    own_team_formation: str = ""
    opponent_team_name: str = ""
    opponent_club_name: str = ""
    opponent_short_name: str = ""
    opponent_team_color: str = ""
    opponent_team_formation: str = ""
    info: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> RecordingDetails:
        data = _require_object(data, "recording details")
        info = data.get("info")
        return cls(
            **_recording_fields(data),
            type=_as_str(data.get("type")),
            end=_as_datetime(data.get("end")),
            own_team_home_or_away=_as_str(data.get("own_team_home_or_away")),
            own_team_color=_as_str(data.get("own_team_color")),
            own_team_formation=_as_str(data.get("own_team_formation")),
            opponent_team_name=_as_str(data.get("opponent_team_name")),
            opponent_club_name=_as_str(data.get("opponent_club_name")),
            opponent_short_name=_as_str(data.get("opponent_short_name")),
            opponent_team_color=_as_str(data.get("opponent_team_color")),
            opponent_team_formation=_as_str(data.get("opponent_team_formation")),
            info=info if isinstance(info, dict) else {},
        )

    def score(self) -> tuple[float | None, float | None] | None:
        """Final score as (own, opponent).

        ``score_aggregated`` holds the actual final score and wins over the
        plain ``score`` when both are present.
        """
        stats = dig(self.info, "stats")
        if not isinstance(stats, dict):
            return None
        score = stats.get("score_aggregated")
        if not isinstance(score, dict):
            score = stats.get("score")
        if not isinstance(score, dict):
            return None
        own = _as_number(score.get("own"))
        opponent = _as_number(score.get("opponent"))
        if own is None and opponent is None:
            return None
        return own, opponent

    @property
    def age_group(self) -> str:
        value = self.info.get("age_group")
        return value if isinstance(value, str) else ""


@dataclass(frozen=True)
class Period:
    """A timed segment of a match, offsets in seconds from the recording start"""

    timeframe: tuple[float, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> Period:
        data = _require_object(data, "period")
        raw = data.get("timeframe")
        if not isinstance(raw, list | tuple):
            return cls()
        return cls(timeframe=tuple(n for n in (_as_number(v) for v in raw) if n is not None))

    @property
    def start(self) -> float | None:
        return self.timeframe[0] if self.timeframe else None

    @property
    def end(self) -> float | None:
        return self.timeframe[1] if len(self.timeframe) > 1 else None

    def to_dict(self) -> dict[str, Any]:
        return {"timeframe": list(self.timeframe)}


def decode_recordings(data: Any) -> list[Recording]:
    return [Recording.from_dict(item) for item in _require_list(data, "recordings")]


def decode_periods(data: Any) -> list[Period]:
    return [Period.from_dict(item) for item in _require_list(data, "periods")]


def kickoff_offset(periods: list[Period] | None) -> int | None:
    """Start offset (whole seconds) of the first period, if known"""
    if not periods:
        return None
    start = periods[0].start
    return int(start) if start is not None else None
