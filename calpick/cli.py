from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

import orjson

from .engine import CalendarEngine
from .io import commit_to_dict, dumps, load_script, state_to_dict
from .model import CalendarDate
from .presets import ClockResolver, validate_presets
from .util.console import warn
from .util.tz import normalize_tz_name


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(
        description="Replay a calendar selection script and print the committed selections as JSON."
    )
    ap.add_argument("script", help="JSON file: {\"config\": {...}, \"events\": [...]}")
    ap.add_argument("--out", default=None, help="Write the JSON result here instead of stdout")
    ap.add_argument(
        "--tz",
        default=os.getenv("CALPICK_TZ", "local"),
        help="Timezone used to compute 'today' for presets (default: env CALPICK_TZ or 'local')",
    )
    ap.add_argument(
        "--today",
        default=os.getenv("CALPICK_TODAY") or None,
        help="Pin 'today' to YYYY-MM-DD for reproducible replays (default: env CALPICK_TODAY)",
    )
    ap.add_argument("--strict-presets", action="store_true", help="Fail if a preset does not resolve cleanly")
    ap.add_argument("--verbose", action="store_true", help="Log every transition to stderr")

    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    try:
        clock_resolver = ClockResolver(tz_name=normalize_tz_name(args.tz))
    except ValueError as e:
        raise SystemExit(f"Invalid --tz value: {e}")

    if args.today:
        try:
            pinned = CalendarDate.parse(args.today)
        except ValueError as e:
            raise SystemExit(f"Invalid --today value: {e}")
        clock_resolver = ClockResolver(today=lambda: pinned)

    today = clock_resolver.today()
    try:
        cfg, events = load_script(Path(args.script), today=today)
    except OSError as e:
        raise SystemExit(f"Failed to read script: {e}")
    except (orjson.JSONDecodeError, ValueError) as e:
        raise SystemExit(f"Invalid script: {e}")

    errs = validate_presets(cfg.predefined_ranges, clock_resolver)
    if errs:
        if args.strict_presets:
            raise SystemExit("Invalid presets:\n" + "\n".join(f"  - {e}" for e in errs))
        for e in errs:
            warn(e)

    commits: list[dict] = []
    engine = CalendarEngine(cfg, resolver=clock_resolver, clock=clock_resolver.today)
    for i, ev in enumerate(events):
        for c in engine.dispatch(ev):
            d = commit_to_dict(c)
            d["event"] = i
            commits.append(d)

    data = dumps({"commits": commits, "state": state_to_dict(engine.state)})

    if args.out:
        out_path = Path(args.out)
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError as e:
            raise SystemExit(f"Cannot create output directory '{out_path.parent}': {e}")
        out_path.write_bytes(data + b"\n")
        print(str(out_path.resolve()))
        return

    sys.stdout.write(data.decode("utf-8") + "\n")


if __name__ == "__main__":
    main()
