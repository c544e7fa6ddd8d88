import argparse
import json
import logging
import os
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

from trip_ga.data import (
    DEFAULT_DESTINATIONS,
    load_destinations,
    load_distance_table,
    load_tsplib,
    write_distance_records,
)
from trip_ga.distances import DistanceTable, MissingDistanceError
from trip_ga.evaluation import GenerationReport
from trip_ga.evolutionary import EvolutionConfig, EvolutionarySearch, InvalidConfigurationError
from trip_ga.fetch import DistanceMatrixClient, fetch_distance_records


API_KEY_ENV = "TRIP_GA_API_KEY"
API_KEY_FILE = Path("apikey.ignore")


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(asctime)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _resolve_api_key(explicit: Optional[str]) -> Optional[str]:
    if explicit:
        return explicit
    if os.environ.get(API_KEY_ENV):
        return os.environ[API_KEY_ENV]
    if API_KEY_FILE.exists():
        return API_KEY_FILE.read_text().strip()
    return None


def _read_destinations(path: Optional[str]) -> List[str]:
    if path is None:
        return list(DEFAULT_DESTINATIONS)
    return load_destinations(Path(path))


def load_inputs(args) -> Tuple[List, DistanceTable]:
    if args.tsplib:
        return load_tsplib(Path(args.tsplib))
    destinations = _read_destinations(args.destinations)
    table = load_distance_table(Path(args.distances))
    return destinations, table


def config_from_args(args) -> EvolutionConfig:
    return EvolutionConfig(
        generations=args.generations,
        population_size=args.population_size,
        survivor_divisor=args.survivor_divisor,
        random_seed=args.seed,
        report_interval=args.report_interval,
        workers=args.workers,
        anchor_last=args.anchor_last,
    )


def gather_distances(destinations: List[str], out: Path, api_key: str) -> bool:
    log(f"gathering distances for {len(destinations)} destinations")
    client = DistanceMatrixClient(api_key)
    count = write_distance_records(out, fetch_distance_records(destinations, client))
    expected = len(destinations) * (len(destinations) - 1)
    log(f"wrote {count} of {expected} distances to {out}")
    return count == expected


def run(args) -> int:
    t0 = time.perf_counter()
    try:
        if not args.tsplib and not Path(args.distances).exists():
            api_key = _resolve_api_key(None)
            if not api_key:
                log(
                    f"{args.distances} not found; run `trip-ga fetch` first, "
                    f"or set {API_KEY_ENV} to gather distances automatically"
                )
                return 2
            gather_distances(_read_destinations(args.destinations), Path(args.distances), api_key)
        destinations, table = load_inputs(args)
    except (OSError, ValueError) as exc:
        log(f"could not load inputs: {exc}")
        return 2
    log(f"loaded {len(destinations)} destinations and {len(table)} distances in {time.perf_counter() - t0:.2f}s")

    cfg = config_from_args(args)

    def on_generation(report: GenerationReport) -> None:
        if args.progress and args.report_interval and report.generation % args.report_interval == 0:
            print(
                f"gen {report.generation}: best={report.best_distance} "
                f"global={report.global_best_distance} mean={report.mean_distance:.1f} "
                f"stale={report.stale_generations}"
            )

    try:
        search = EvolutionarySearch(cfg, destinations, table, on_generation=on_generation)
        best = search.run()
    except InvalidConfigurationError as exc:
        log(f"invalid configuration: {exc}")
        return 2
    except ValueError as exc:
        log(f"invalid destinations: {exc}")
        return 2
    except MissingDistanceError as exc:
        log(f"distance table is incomplete: {exc}")
        return 1
    log(f"search finished in {time.perf_counter() - t0:.2f}s")
    print(
        f"Shortest path found (generations {cfg.generations}, population size {cfg.population_size}, "
        f"survivor divisor {cfg.survivor_divisor}):"
    )
    print(best.describe())
    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(json.dumps(search.to_state(), indent=2))
        log(f"wrote {out}")
    return 0


def fetch(args) -> int:
    api_key = _resolve_api_key(args.api_key)
    if not api_key:
        log(f"no API key: pass --api-key, set {API_KEY_ENV} or create {API_KEY_FILE}")
        return 2
    out = Path(args.distances)
    if out.exists() and not args.force:
        log(f"{out} already exists; use --force to regenerate")
        return 0
    complete = gather_distances(_read_destinations(args.destinations), out, api_key)
    return 0 if complete else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Trip planner GA CLI")
    parser.add_argument("-v", "--verbose", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    defaults = EvolutionConfig()
    run_parser = subparsers.add_parser("run", help="Search for a short route over the destinations")
    run_parser.add_argument("--destinations", default=None, help="One destination per line")
    run_parser.add_argument("--distances", default="distances.txt", help="Tab separated distance table")
    run_parser.add_argument("--tsplib", default=None, help="Read destinations and distances from a TSPLIB file")
    run_parser.add_argument("--generations", type=int, default=defaults.generations)
    run_parser.add_argument("--population-size", type=int, default=defaults.population_size)
    run_parser.add_argument("--survivor-divisor", type=int, default=defaults.survivor_divisor)
    run_parser.add_argument("--seed", type=int, default=defaults.random_seed)
    run_parser.add_argument("--report-interval", type=int, default=defaults.report_interval)
    run_parser.add_argument("--workers", type=int, default=defaults.workers)
    run_parser.add_argument("--anchor-last", action="store_true", help="Never move the final destination")
    run_parser.add_argument("--progress", action="store_true", help="Print a line per reported generation")
    run_parser.add_argument("--output", default=None, help="Write the best route as JSON")
    run_parser.set_defaults(func=run)

    fetch_parser = subparsers.add_parser("fetch", help="Gather pairwise driving distances")
    fetch_parser.add_argument("--destinations", default=None)
    fetch_parser.add_argument("--distances", default="distances.txt")
    fetch_parser.add_argument("--api-key", default=None)
    fetch_parser.add_argument("--force", action="store_true")
    fetch_parser.set_defaults(func=fetch)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
