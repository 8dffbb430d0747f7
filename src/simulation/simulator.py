"""What-if standings: apply score predictions to pending matches and re-rank.

Pure functions only: inputs are never mutated and nothing here raises for
bad user input; incomplete predictions and unknown teams are skipped.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from domain.models import (
    Match,
    MatchesSnapshot,
    MatchStatus,
    Prediction,
    StandingRow,
    StandingsSnapshot,
    utc_now_iso,
)

POINTS_WIN = 3
POINTS_DRAW = 1

_DIGITS_RE = re.compile(r"^\d+$")

PredictionLike = Prediction | Mapping[str, object]


def _field(prediction: PredictionLike, name: str) -> object:
    if isinstance(prediction, Prediction):
        return getattr(prediction, name)
    return prediction.get(name)


def prediction_score(prediction: Optional[PredictionLike]) -> Optional[Tuple[int, int]]:
    """(home, away) for a complete prediction, else None."""
    if not isinstance(prediction, (Prediction, Mapping)):
        return None
    goals = []
    for name in ("home", "away"):
        value = _field(prediction, name)
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            if value < 0:
                return None
            goals.append(value)
            continue
        text = str(value if value is not None else "").strip()
        if not _DIGITS_RE.match(text):
            return None
        goals.append(int(text))
    return goals[0], goals[1]


def is_complete_prediction(prediction: Optional[PredictionLike]) -> bool:
    return prediction_score(prediction) is not None


def pending_matches(fixtures: MatchesSnapshot) -> Iterator[Match]:
    for match in fixtures.iter_matches():
        if match.status is MatchStatus.SCHEDULED:
            yield match


def rank_key(row: StandingRow, original_pos: int) -> Tuple[int, int, int, int]:
    return (-row.pts, -row.gd, -row.gf, original_pos)


def rank_rows(rows: Iterable[StandingRow], original_pos: Mapping[str, int]) -> List[StandingRow]:
    """Sort by points, goal difference, goals for, then previous position; renumber."""
    ranked = sorted(rows, key=lambda r: rank_key(r, original_pos.get(r.team_id, r.pos)))
    for idx, row in enumerate(ranked, start=1):
        row.pos = idx
    return ranked


def _apply_result(row: StandingRow, scored: int, conceded: int) -> None:
    row.mp += 1
    row.gf += scored
    row.ga += conceded
    row.gd = row.gf - row.ga
    if scored > conceded:
        row.w += 1
        row.pts += POINTS_WIN
    elif scored == conceded:
        row.d += 1
        row.pts += POINTS_DRAW
    else:
        row.l += 1


def simulate(
    base: StandingsSnapshot,
    fixtures: MatchesSnapshot,
    predictions: Mapping[str, PredictionLike],
    *,
    now: Optional[str] = None,
) -> StandingsSnapshot:
    rows: Dict[str, StandingRow] = {}
    original_pos: Dict[str, int] = {}
    for row in base.table:
        rows[row.team_id] = row.copy()
        original_pos[row.team_id] = row.pos

    applied = 0
    for match in pending_matches(fixtures):
        score = prediction_score(predictions.get(match.match_id))
        if score is None:
            continue
        home = rows.get(match.home_team_id)
        away = rows.get(match.away_team_id)
        if home is None or away is None:
            continue
        home_goals, away_goals = score
        _apply_result(home, home_goals, away_goals)
        _apply_result(away, away_goals, home_goals)
        applied += 1

    if not applied:
        # no result applied: keep the scraped order
        table = [row.copy() for row in base.table]
    else:
        table = rank_rows(rows.values(), original_pos)

    return StandingsSnapshot(
        updated_at=now or utc_now_iso(),
        group=base.group,
        table=table,
    )
