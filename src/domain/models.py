"""Domain models for the standings / fixtures snapshots.

JSON keys are camelCase because the snapshots are consumed by the web table.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


def utc_now_iso() -> str:
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


class MatchStatus(str, Enum):
    SCHEDULED = "scheduled"
    PLAYED = "played"


@dataclass(slots=True)
class StandingRow:
    pos: int
    team_id: str
    team_name: str
    pts: int = 0
    mp: int = 0
    w: int = 0
    d: int = 0
    l: int = 0  # noqa: E741
    gf: int = 0
    ga: int = 0
    gd: int = 0

    def copy(self) -> "StandingRow":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pos": self.pos,
            "teamId": self.team_id,
            "teamName": self.team_name,
            "pts": self.pts,
            "mp": self.mp,
            "w": self.w,
            "d": self.d,
            "l": self.l,
            "gf": self.gf,
            "ga": self.ga,
            "gd": self.gd,
        }

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> "StandingRow":
        gf = int(obj.get("gf", 0))
        ga = int(obj.get("ga", 0))
        return cls(
            pos=int(obj["pos"]),
            team_id=str(obj["teamId"]),
            team_name=str(obj.get("teamName", "")),
            pts=int(obj.get("pts", 0)),
            mp=int(obj.get("mp", 0)),
            w=int(obj.get("w", 0)),
            d=int(obj.get("d", 0)),
            l=int(obj.get("l", 0)),
            gf=gf,
            ga=ga,
            gd=gf - ga,
        )


@dataclass(slots=True)
class StandingsSnapshot:
    updated_at: str
    group: str
    table: List[StandingRow] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "updatedAt": self.updated_at,
            "group": self.group,
            "table": [r.to_dict() for r in self.table],
        }

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> "StandingsSnapshot":
        return cls(
            updated_at=str(obj.get("updatedAt", "")),
            group=str(obj.get("group", "")),
            table=[StandingRow.from_dict(r) for r in obj.get("table", [])],
        )


@dataclass(slots=True, frozen=True)
class Score:
    home: int
    away: int

    def to_dict(self) -> Dict[str, int]:
        return {"home": self.home, "away": self.away}


@dataclass(slots=True)
class Match:
    match_id: str
    matchday: int
    home_team_id: str
    away_team_id: str
    home_name: str
    away_name: str
    date: Optional[str] = None
    time: Optional[str] = None
    score: Optional[Score] = None

    @property
    def status(self) -> MatchStatus:
        return MatchStatus.PLAYED if self.score is not None else MatchStatus.SCHEDULED

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "matchId": self.match_id,
            "matchday": self.matchday,
            "date": self.date,
            "time": self.time,
            "homeTeamId": self.home_team_id,
            "awayTeamId": self.away_team_id,
            "homeName": self.home_name,
            "awayName": self.away_name,
            "status": self.status.value,
        }
        if self.score is not None:
            out["score"] = self.score.to_dict()
        return out

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> "Match":
        raw_score = obj.get("score")
        score = None
        if obj.get("status") == MatchStatus.PLAYED.value and isinstance(raw_score, dict):
            score = Score(home=int(raw_score["home"]), away=int(raw_score["away"]))
        return cls(
            match_id=str(obj["matchId"]),
            matchday=int(obj["matchday"]),
            home_team_id=str(obj["homeTeamId"]),
            away_team_id=str(obj["awayTeamId"]),
            home_name=str(obj.get("homeName", "")),
            away_name=str(obj.get("awayName", "")),
            date=obj.get("date"),
            time=obj.get("time"),
            score=score,
        )


@dataclass(slots=True)
class Matchday:
    matchday: int
    matches: List[Match] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"matchday": self.matchday, "matches": [m.to_dict() for m in self.matches]}


@dataclass(slots=True)
class MatchesSnapshot:
    updated_at: str
    season: str
    group: str
    competition: str
    matchdays: List[Matchday] = field(default_factory=list)

    def iter_matches(self):
        for md in self.matchdays:
            yield from md.matches

    def to_dict(self) -> Dict[str, Any]:
        return {
            "updatedAt": self.updated_at,
            "season": self.season,
            "group": self.group,
            "competition": self.competition,
            "matchdays": [md.to_dict() for md in self.matchdays],
        }

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> "MatchesSnapshot":
        matchdays = [
            Matchday(
                matchday=int(md["matchday"]),
                matches=[Match.from_dict(m) for m in md.get("matches", [])],
            )
            for md in obj.get("matchdays", [])
        ]
        return cls(
            updated_at=str(obj.get("updatedAt", "")),
            season=str(obj.get("season", "")),
            group=str(obj.get("group", "")),
            competition=str(obj.get("competition", "")),
            matchdays=matchdays,
        )


@dataclass(slots=True, frozen=True)
class Prediction:
    """User-entered score guess; values are kept as typed (digit strings)."""

    home: str
    away: str

    def to_dict(self) -> Dict[str, str]:
        return {"home": self.home, "away": self.away}

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> "Prediction":
        return cls(home=str(obj.get("home", "") or ""), away=str(obj.get("away", "") or ""))


@dataclass(slots=True)
class RunMeta:
    updated_at: str
    standings_source: str
    standings_url: str
    fixtures_url: str
    standings_rows: int
    matchdays: int
    matches: int
    standings_bytes: int
    fixtures_bytes: int
    fallback_used: bool = False
    primary_error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "updatedAt": self.updated_at,
            "standingsSource": self.standings_source,
            "standingsUrl": self.standings_url,
            "fixturesUrl": self.fixtures_url,
            "standingsRows": self.standings_rows,
            "matchdays": self.matchdays,
            "matches": self.matches,
            "standingsBytes": self.standings_bytes,
            "fixturesBytes": self.fixtures_bytes,
            "fallbackUsed": self.fallback_used,
            "primaryError": self.primary_error,
        }
