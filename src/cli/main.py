"""CLI entry point for the standings scraper and what-if simulator."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any, Tuple

from config import settings
from core import filesystem, http_client
from domain.models import MatchesSnapshot, StandingsSnapshot
from parsing import row_inspector
from parsing.errors import ParseError
from services import pipeline, publish
from simulation import simulator
from simulation.predictions import PredictionStore

logger = logging.getLogger("rfef")


class SnapshotLoadError(RuntimeError):
    pass


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() == "true"


def _predictions_path(args: argparse.Namespace) -> str:
    return args.predictions or os.path.join(args.data_dir, settings.PREDICTIONS_FILENAME)


def load_snapshots(data_dir: str) -> Tuple[StandingsSnapshot, MatchesSnapshot]:
    try:
        standings = StandingsSnapshot.from_dict(
            filesystem.read_json(os.path.join(data_dir, settings.STANDINGS_FILENAME))
        )
        matches = MatchesSnapshot.from_dict(
            filesystem.read_json(os.path.join(data_dir, settings.MATCHES_FILENAME))
        )
    except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
        raise SnapshotLoadError(f"Failed to load data from {data_dir}: {e}") from e
    return standings, matches


def format_table(snapshot: StandingsSnapshot) -> str:
    header = f"{'Pos':>3}  {'Team':<28} {'Pts':>4} {'MP':>3} {'W':>3} {'D':>3} {'L':>3} {'GF':>4} {'GA':>4} {'GD':>4}"
    lines = [snapshot.group, header]
    for r in snapshot.table:
        lines.append(
            f"{r.pos:>3}  {r.team_name[:28]:<28} {r.pts:>4} {r.mp:>3} {r.w:>3} {r.d:>3} "
            f"{r.l:>3} {r.gf:>4} {r.ga:>4} {r.gd:>+4}"
        )
    return "\n".join(lines)


def cmd_scrape(args: argparse.Namespace) -> int:
    options = pipeline.RunOptions(
        data_dir=args.data_dir,
        ci=args.ci or _env_flag("CI"),
        no_cache=args.no_cache or _env_flag("NO_CACHE"),
        use_cache=not args.no_html_cache,
    )
    try:
        result = pipeline.run(options)
    except (http_client.FetchError, ParseError, pipeline.StandingsUnavailableError) as e:
        logger.error("scrape failed: %s", e)
        return 1
    if args.json:
        print(json.dumps(result, indent=2, ensure_ascii=False))
    else:
        print("Scrape summary:")
        for k, v in result.items():
            print(f"  {k}: {v}")
    return 0


def cmd_simulate(args: argparse.Namespace) -> int:
    try:
        standings, matches = load_snapshots(args.data_dir)
    except SnapshotLoadError as e:
        print(str(e), file=sys.stderr)
        return 1
    predictions = PredictionStore(_predictions_path(args)).load()
    result = simulator.simulate(standings, matches, predictions)
    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(format_table(result))
    return 0


def cmd_predict(args: argparse.Namespace) -> int:
    store = PredictionStore(_predictions_path(args))
    if args.list:
        ok = True
    elif args.clear:
        ok = store.clear()
    elif args.remove:
        ok = store.remove(args.remove)
    elif args.match_id:
        if args.home is None or args.away is None:
            print("predict needs MATCH_ID HOME AWAY", file=sys.stderr)
            return 2
        ok = store.set(args.match_id, args.home, args.away)
    else:
        ok = True
    listing: dict[str, Any] = {mid: p.to_dict() for mid, p in sorted(store.all().items())}
    print(json.dumps(listing, indent=2, ensure_ascii=False))
    return 0 if ok else 1


def cmd_sync(args: argparse.Namespace) -> int:
    copied = publish.sync_data(args.data_dir, args.dest)
    for name in copied:
        print(f"Copied {name} -> {os.path.join(args.dest, name)}")
    if not copied:
        print(f"No JSON files found in {args.data_dir}")
    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    html = filesystem.read_text(args.html_file)
    hits = row_inspector.find_rows(html, *args.needles, limit=args.limit)
    print(json.dumps([h.to_dict() for h in hits], indent=2, ensure_ascii=False))
    return 0


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    common.add_argument("--data-dir", default=settings.DATA_DIR, help="Snapshot directory")

    p = argparse.ArgumentParser(prog="rfef-standings")
    sub = p.add_subparsers(dest="command", required=True)

    scrape = sub.add_parser("scrape", parents=[common], help="Fetch standings + fixtures and write JSON snapshots")
    scrape.add_argument("--ci", action="store_true", help="Skip BeSoccer (default from CI=true)")
    scrape.add_argument(
        "--no-cache", action="store_true", help="Ignore cached HTML (default from NO_CACHE=true)"
    )
    scrape.add_argument("--no-html-cache", action="store_true", help="Do not read or write _debug HTML")
    scrape.add_argument("--json", action="store_true", help="Output JSON summary")
    scrape.set_defaults(func=cmd_scrape)

    sim = sub.add_parser("simulate", parents=[common], help="Apply stored predictions and print the table")
    sim.add_argument("--predictions", help="Predictions file (default: <data-dir>/predictions.json)")
    sim.add_argument("--json", action="store_true", help="Output the simulated snapshot as JSON")
    sim.set_defaults(func=cmd_simulate)

    pred = sub.add_parser("predict", parents=[common], help="Edit stored score predictions")
    pred.add_argument("match_id", nargs="?")
    pred.add_argument("home", nargs="?")
    pred.add_argument("away", nargs="?")
    pred.add_argument("--remove", metavar="MATCH_ID")
    pred.add_argument("--clear", action="store_true")
    pred.add_argument("--list", action="store_true", help="Only print stored predictions")
    pred.add_argument("--predictions", help="Predictions file (default: <data-dir>/predictions.json)")
    pred.set_defaults(func=cmd_predict)

    sync = sub.add_parser("sync", parents=[common], help="Copy snapshots into the web app data dir")
    sync.add_argument("--dest", default=settings.WEB_DATA_DIR)
    sync.set_defaults(func=cmd_sync)

    inspect = sub.add_parser("inspect", parents=[common], help="Dump table rows containing all given texts")
    inspect.add_argument("html_file")
    inspect.add_argument("needles", nargs="*")
    inspect.add_argument("--limit", type=int, default=20)
    inspect.set_defaults(func=cmd_inspect)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
