import copy

from domain.models import Prediction
from simulation import simulator
from tests.factories import fixtures, match, row, standings


def _base():
    return standings(
        row(1, "europa", 42, 32, 18, w=13, d=3, l=4),
        row(2, "x", 40, 28, 17, w=12, d=4, l=4),
        row(3, "y", 33, 25, 20, w=9, d=6, l=5),
        row(4, "z", 30, 22, 22, w=8, d=6, l=6),
    )


def _by_id(snapshot):
    return {r.team_id: r for r in snapshot.table}


def test_no_predictions_reproduces_base_table():
    base = _base()
    out = simulator.simulate(base, fixtures(match("m1", "x", "y")), {}, now="2026-01-01T00:00:00.000Z")
    assert out.updated_at == "2026-01-01T00:00:00.000Z"
    assert [r.to_dict() for r in out.table] == [r.to_dict() for r in base.table]


def test_home_win_scenario():
    out = simulator.simulate(_base(), fixtures(match("m1", "x", "y")), {"m1": {"home": "3", "away": "1"}})
    x = _by_id(out)["x"]
    assert (x.pts, x.mp, x.gf, x.ga, x.gd, x.w) == (43, 21, 31, 18, 13, 13)
    y = _by_id(out)["y"]
    assert (y.pts, y.mp, y.gf, y.ga, y.l) == (33, 21, 26, 23, 6)
    # x overtakes europa on points
    assert [r.team_id for r in out.table][:2] == ["x", "europa"]
    assert [r.pos for r in out.table] == [1, 2, 3, 4]


def test_draw_awards_one_point_each():
    out = simulator.simulate(_base(), fixtures(match("m1", "y", "z")), {"m1": Prediction("0", "0")})
    y, z = _by_id(out)["y"], _by_id(out)["z"]
    assert (y.pts, y.d, z.pts, z.d) == (34, 7, 31, 7)


def test_incomplete_or_invalid_predictions_are_skipped():
    base = _base()
    fx = fixtures(
        match("m1", "x", "y"),
        match("m2", "europa", "z"),
        match("m3", "y", "z"),
    )
    preds = {
        "m1": {"home": "", "away": "2"},
        "m2": {"home": "-1", "away": "0"},
        "m3": {"home": "two", "away": "1"},
    }
    out = simulator.simulate(base, fx, preds)
    assert [r.to_dict() for r in out.table] == [r.to_dict() for r in base.table]


def test_prediction_values_of_the_wrong_type_are_skipped():
    base = _base()
    fx = fixtures(match("m1", "x", "y"), match("m2", "europa", "z"), match("m3", "y", "z"))
    preds = {"m1": ["3", "1"], "m2": "3-1", "m3": None}
    out = simulator.simulate(base, fx, preds)
    assert [r.to_dict() for r in out.table] == [r.to_dict() for r in base.table]
    assert simulator.prediction_score(("3", "1")) is None


def test_no_applied_result_keeps_scraped_order():
    # "b" sits above "a" on head-to-head despite the worse goal difference
    base = standings(
        row(1, "b", 30, 20, 20, w=9, d=3, l=8),
        row(2, "a", 30, 25, 20, w=9, d=3, l=8),
        row(3, "c", 10, 5, 30, w=2, d=4, l=14),
    )
    fx = fixtures(match("m1", "a", "c"))
    out = simulator.simulate(base, fx, {"m1": {"home": "", "away": "1"}})
    assert [(r.pos, r.team_id) for r in out.table] == [(1, "b"), (2, "a"), (3, "c")]

    out = simulator.simulate(base, fx, {"m1": {"home": "0", "away": "0"}})
    assert [r.team_id for r in out.table] == ["a", "b", "c"]


def test_played_matches_and_unknown_teams_are_ignored():
    base = _base()
    fx = fixtures(
        match("m1", "x", "y", score=(0, 5)),
        match("m2", "x", "ghost"),
    )
    preds = {"m1": {"home": "3", "away": "0"}, "m2": {"home": "4", "away": "0"}}
    out = simulator.simulate(base, fx, preds)
    assert _by_id(out)["x"].pts == 40
    assert _by_id(out)["x"].mp == 20


def test_tie_break_uses_original_position():
    base = standings(
        row(1, "top", 50, 40, 10, w=16, d=2, l=2),
        row(2, "a", 30, 20, 20, w=8, d=6, l=6),
        row(3, "c", 29, 25, 20, w=8, d=5, l=7),
        row(4, "d", 28, 20, 19, w=8, d=4, l=8),
        row(5, "b", 27, 19, 20, w=7, d=6, l=7),
    )
    fx = fixtures(match("m1", "b", "d"))
    out = simulator.simulate(base, fx, {"m1": {"home": "1", "away": "0"}})
    a, b = _by_id(out)["a"], _by_id(out)["b"]
    assert (a.pts, a.gd, a.gf) == (b.pts, b.gd, b.gf) == (30, 0, 20)
    assert [r.team_id for r in out.table] == ["top", "a", "b", "c", "d"]

    # DOM order of the base table does not matter, only original positions
    flipped = standings(*reversed([r.copy() for r in base.table]))
    out2 = simulator.simulate(flipped, fx, {"m1": {"home": "1", "away": "0"}})
    assert [r.team_id for r in out2.table] == ["top", "a", "b", "c", "d"]


def test_inputs_are_not_mutated():
    base = _base()
    fx = fixtures(match("m1", "x", "y"))
    snapshot_before = copy.deepcopy(base.to_dict())
    fixtures_before = copy.deepcopy(fx.to_dict())
    simulator.simulate(base, fx, {"m1": {"home": "5", "away": "0"}})
    assert base.to_dict() == snapshot_before
    assert fx.to_dict() == fixtures_before


def test_deterministic_output():
    fx = fixtures(match("m1", "x", "y"), match("m2", "europa", "z"))
    preds = {"m1": {"home": "1", "away": "1"}, "m2": {"home": "0", "away": "2"}}
    first = simulator.simulate(_base(), fx, preds, now="t")
    second = simulator.simulate(_base(), fx, preds, now="t")
    assert first.to_dict() == second.to_dict()


def test_simulated_rows_keep_invariants():
    fx = fixtures(match("m1", "x", "y"), match("m2", "europa", "z"), match("m3", "z", "x", matchday=2))
    preds = {"m1": {"home": "2", "away": "2"}, "m2": {"home": "0", "away": "2"}, "m3": {"home": "1", "away": "4"}}
    out = simulator.simulate(_base(), fx, preds)
    for r in out.table:
        assert r.mp == r.w + r.d + r.l
        assert r.gd == r.gf - r.ga
    keys = [(-r.pts, -r.gd, -r.gf) for r in out.table]
    assert keys == sorted(keys)
    assert [r.pos for r in out.table] == list(range(1, 5))


def test_prediction_helpers():
    assert simulator.is_complete_prediction({"home": " 2 ", "away": "0"})
    assert simulator.is_complete_prediction(Prediction("10", "3"))
    assert not simulator.is_complete_prediction({"home": "2"})
    assert not simulator.is_complete_prediction(None)
    assert simulator.prediction_score({"home": 1, "away": 0}) == (1, 0)
    fx = fixtures(match("m1", "x", "y"), match("m2", "x", "z", score=(1, 0)))
    assert [m.match_id for m in simulator.pending_matches(fx)] == ["m1"]
