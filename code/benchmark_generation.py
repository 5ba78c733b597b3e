#!/usr/bin/env python3

# This file performs multiple runs of floor generation, collecting and reporting metrics.
# Used for testing both performance of the algorithm and quality of resulting maps.

from __future__ import annotations

import argparse
import datetime
from dataclasses import dataclass
import json
import math
import os
import random
import statistics
import time
from typing import Any, Callable, Dict, List

import networkx as nx

from dungeon_config import DungeonConfig
from dungeon_generator import DungeonGenerator
from dungeon_models import TileState
from tile_grid import TileGrid

# Default dungeon configuration mirrors the CLI defaults from main.py.
DEFAULT_CONFIG_KWARGS = dict(
    width=100,
    height=100,
    max_room_dimension=10,
    collect_metrics=True,
)

DEFAULT_FLOOR_COVERAGE_THRESHOLD = 0.25
DEFAULT_CONNECTED_FRACTION_THRESHOLD = 1.0

WALKABLE_STATES = (TileState.FLOOR, TileState.DOOR)


def build_config(seed: int) -> DungeonConfig:
    return DungeonConfig(random_seed=seed, **DEFAULT_CONFIG_KWARGS)  # type: ignore[arg-type]


@dataclass
class GenerationRunResult:
    seed: int
    duration: float
    rooms_placed: int
    candidate_rooms: int
    blocked_connectors: int
    doors_healed: int
    door_count: int
    floor_coverage: float
    walkable_components: int
    largest_component_fraction: float
    phase_metrics: Dict[str, Dict[str, float | int]]


def build_walkable_graph(grid: TileGrid) -> nx.Graph:
    """Graph of floor and door tiles, with edges between 4-neighbours."""
    graph = nx.Graph()
    for x, y, state in grid.cells():
        if state not in WALKABLE_STATES:
            continue
        graph.add_node((x, y))
        for dx, dy in ((1, 0), (0, 1)):
            nx_, ny_ = x + dx, y + dy
            if grid.in_bounds(nx_, ny_) and grid.get(nx_, ny_) in WALKABLE_STATES:
                graph.add_edge((x, y), (nx_, ny_))
    return graph


def walkable_connectivity(grid: TileGrid) -> tuple[int, float]:
    """Return the number of walkable components and the share of walkable tiles in the largest one."""
    graph = build_walkable_graph(grid)
    if graph.number_of_nodes() == 0:
        return 0, 0.0
    components = list(nx.connected_components(graph))
    largest = max(len(component) for component in components)
    return len(components), largest / graph.number_of_nodes()


def fraction_at_least(values: List[float], threshold: float) -> float:
    if not values:
        return float("nan")
    return sum(1 for value in values if value >= threshold) / len(values)


def format_fraction(value: float) -> str:
    if math.isnan(value):
        return "nan"
    return f"{value:.1%}"


def format_value(value: float, formatter: Callable[[float], str] | None = None) -> str:
    numeric = float(value)
    if math.isnan(numeric):
        return "nan"
    if formatter is None:
        return f"{numeric:.3f}"
    return formatter(numeric)


def format_seconds(value: float) -> str:
    if value >= 1.0:
        return f"{value:.3f}s"
    return f"{value * 1000:.1f}ms"


def json_safe_number(value: float | int | None) -> float | int | None:
    if value is None:
        return None
    numeric = float(value)
    if math.isnan(numeric) or math.isinf(numeric):
        return None
    if isinstance(value, int):
        return value
    return numeric


def compute_basic_stats(values: List[float]) -> Dict[str, float]:
    return {
        "mean": statistics.mean(values),
        "median": statistics.median(values),
        "min": min(values),
        "max": max(values),
        "stdev": statistics.stdev(values) if len(values) > 1 else float("nan"),
    }


@dataclass
class MetricDefinition:
    key: str
    name: str
    values: List[float]
    value_formatter: Callable[[float], str] | None = None
    success_threshold: float | None = None
    success_label: str | None = None


def report_metric(definition: MetricDefinition) -> None:
    values = definition.values
    print(definition.name + ":")
    if not values:
        print("  (no data)")
        return

    stats = compute_basic_stats(values)
    print(
        "  Count {count}, mean {mean}, median {median}, min {min}, max {max}, stdev {stdev}".format(
            count=len(values),
            mean=format_value(stats["mean"], definition.value_formatter),
            median=format_value(stats["median"], definition.value_formatter),
            min=format_value(stats["min"], definition.value_formatter),
            max=format_value(stats["max"], definition.value_formatter),
            stdev=format_value(stats["stdev"], definition.value_formatter),
        )
    )

    if definition.success_threshold is not None:
        success_rate = fraction_at_least(values, definition.success_threshold)
        label = definition.success_label or (
            ">= " + format_value(definition.success_threshold, definition.value_formatter)
        )
        print(f"  Success rate {format_fraction(success_rate)} ({label})")


def summarize_metric_for_json(definition: MetricDefinition) -> Dict[str, Any]:
    values = definition.values
    summary: Dict[str, Any] = {"count": len(values)}

    if values:
        stats = compute_basic_stats(values)
        summary.update({key: json_safe_number(value) for key, value in stats.items()})
    else:
        summary.update({"mean": None, "median": None, "min": None, "max": None, "stdev": None})

    if definition.success_threshold is not None:
        success_rate = fraction_at_least(values, definition.success_threshold) if values else float("nan")
        summary["success_rate"] = json_safe_number(success_rate)
        summary["success_threshold"] = json_safe_number(definition.success_threshold)

    return summary


def run_single_generation(seed: int) -> GenerationRunResult:
    """Run one floor generation with the provided seed and collect metrics."""
    config = build_config(seed)
    generator = DungeonGenerator(config)

    start = time.perf_counter()
    grid = generator.generate_floor(0)
    end = time.perf_counter()

    metrics = generator.metrics
    counters = metrics.counters() if metrics else {}
    components, largest_fraction = walkable_connectivity(grid)
    floor_coverage = grid.count(TileState.FLOOR) / (grid.width * grid.height)

    return GenerationRunResult(
        seed=seed,
        duration=end - start,
        rooms_placed=counters.get("rooms_placed", 0),
        candidate_rooms=counters.get("candidate_rooms", 0),
        blocked_connectors=counters.get("connectors_blocked", 0),
        doors_healed=counters.get("doors_healed", 0),
        door_count=grid.count(TileState.DOOR),
        floor_coverage=floor_coverage,
        walkable_components=components,
        largest_component_fraction=largest_fraction,
        phase_metrics={
            name: values for name, values in metrics.snapshot().items() if name != "counters"
        } if metrics else {},
    )


def run_benchmark(num_runs: int, seed: int | None) -> List[GenerationRunResult]:
    """Run the generator multiple times and collect run-level metrics."""
    rng = random.Random(seed)
    return [run_single_generation(rng.randint(0, 1_000_000)) for _ in range(num_runs)]


def aggregate_phase_metrics(results: List[GenerationRunResult]) -> Dict[str, Dict[str, float]]:
    totals: Dict[str, Dict[str, float]] = {}
    for result in results:
        for name, metrics in result.phase_metrics.items():
            aggregate = totals.setdefault(name, {"invocations": 0.0, "total_time": 0.0})
            aggregate["invocations"] += float(metrics.get("invocations", 0))
            aggregate["total_time"] += float(metrics.get("total_time", 0.0))
    for aggregate in totals.values():
        invocations = aggregate["invocations"]
        aggregate["average_time"] = aggregate["total_time"] / invocations if invocations else 0.0
    return totals


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Run the floor generator multiple times and report timing and quality statistics."
    )
    parser.add_argument(
        "-n",
        "--runs",
        type=int,
        default=20,
        help="Number of floor generations to execute (default: 20)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Optional seed for the benchmark harness RNG; keeps run seeds reproducible",
    )
    parser.add_argument(
        "--floor-coverage-threshold",
        type=float,
        default=DEFAULT_FLOOR_COVERAGE_THRESHOLD,
        help="Minimum fraction of the map covered by floor for a run to count as successful",
    )
    parser.add_argument(
        "--run-description",
        type=str,
        default=None,
        help="Optional description stored with the JSON results",
    )
    args = parser.parse_args()

    if args.runs <= 0:
        raise SystemExit("Number of runs must be a positive integer")
    if not (0.0 <= args.floor_coverage_threshold <= 1.0):
        raise SystemExit("Floor coverage threshold must be within [0, 1]")

    results = run_benchmark(args.runs, args.seed)
    if not results:
        raise SystemExit("No runs executed")

    durations = [result.duration for result in results]
    worst_duration = max(durations)
    worst_index = durations.index(worst_duration)

    results_json: List[Dict[str, Any]] = []
    for idx, result in enumerate(results, start=1):
        print(
            "Run {idx:02d}: {time} (seed {seed}) | rooms {rooms} | blocked {blocked} | healed {healed}"
            " | coverage {coverage} | components {components}".format(
                idx=idx,
                time=format_seconds(result.duration),
                seed=result.seed,
                rooms=result.rooms_placed,
                blocked=result.blocked_connectors,
                healed=result.doors_healed,
                coverage=format_fraction(result.floor_coverage),
                components=result.walkable_components,
            )
        )
        results_json.append(
            {
                "run_id": idx,
                "seed": result.seed,
                "duration_seconds": json_safe_number(result.duration),
                "rooms_placed": result.rooms_placed,
                "candidate_rooms": result.candidate_rooms,
                "blocked_connectors": result.blocked_connectors,
                "doors_healed": result.doors_healed,
                "door_count": result.door_count,
                "floor_coverage": json_safe_number(result.floor_coverage),
                "walkable_components": result.walkable_components,
                "largest_component_fraction": json_safe_number(result.largest_component_fraction),
            }
        )

    metrics_to_report = [
        MetricDefinition(key="duration", name="Generation time", values=durations, value_formatter=format_seconds),
        MetricDefinition(
            key="rooms_placed",
            name="Rooms placed",
            values=[float(result.rooms_placed) for result in results],
            value_formatter=lambda value: f"{value:.1f}",
        ),
        MetricDefinition(
            key="blocked_connectors",
            name="Blocked connectors",
            values=[float(result.blocked_connectors) for result in results],
            value_formatter=lambda value: f"{value:.1f}",
        ),
        MetricDefinition(
            key="doors_healed",
            name="Doors opened by reconciliation",
            values=[float(result.doors_healed) for result in results],
            value_formatter=lambda value: f"{value:.1f}",
        ),
        MetricDefinition(
            key="floor_coverage",
            name="Floor coverage",
            values=[result.floor_coverage for result in results],
            value_formatter=format_fraction,
            success_threshold=args.floor_coverage_threshold,
        ),
        MetricDefinition(
            key="largest_component_fraction",
            name="Largest walkable component fraction",
            values=[result.largest_component_fraction for result in results],
            value_formatter=format_fraction,
            success_threshold=DEFAULT_CONNECTED_FRACTION_THRESHOLD,
            success_label="fully connected",
        ),
    ]

    aggregated_results_json: Dict[str, Any] = {}
    for metric in metrics_to_report:
        print()
        report_metric(metric)
        aggregated_results_json[metric.key] = summarize_metric_for_json(metric)

    phase_totals = aggregate_phase_metrics(results)
    if phase_totals:
        print()
        print("Phase performance summary:")
        for name, metrics in sorted(phase_totals.items(), key=lambda item: item[1]["total_time"], reverse=True):
            print(
                f"  {name}: invocations={int(metrics['invocations'])}, "
                f"total_time={format_seconds(metrics['total_time'])}, "
                f"avg_time={format_seconds(metrics['average_time'])}"
            )

    aggregated_results_json["worst_case_run"] = {
        "duration_seconds": json_safe_number(worst_duration),
        "seed": results[worst_index].seed,
        "run_id": worst_index + 1,
    }

    timestamp = datetime.datetime.now(datetime.timezone.utc)
    iso_timestamp = timestamp.replace(microsecond=0, tzinfo=None).isoformat() + "Z"
    filename_stamp = timestamp.strftime("%Y%m%dT%H%M%SZ")
    script_dir = os.path.dirname(os.path.abspath(__file__))
    benchmarks_dir = os.path.abspath(os.path.join(script_dir, "..", "benchmarks"))
    os.makedirs(benchmarks_dir, exist_ok=True)
    output_path = os.path.join(benchmarks_dir, f"benchmark-{filename_stamp}.json")

    benchmark_data = {
        "benchmark_run_info": {
            "timestamp": iso_timestamp,
            "config": {key: value for key, value in DEFAULT_CONFIG_KWARGS.items() if key != "collect_metrics"},
            "run_description": args.run_description,
            "num_iterations": args.runs,
            "parameters": {
                "seed": args.seed,
                "floor_coverage_threshold": args.floor_coverage_threshold,
            },
        },
        "aggregated_results": aggregated_results_json,
        "results": results_json,
        "phase_summary": {
            name: {key: json_safe_number(value) for key, value in metrics.items()}
            for name, metrics in sorted(phase_totals.items())
        },
    }

    with open(output_path, "w", encoding="utf-8") as handle:
        json.dump(benchmark_data, handle, indent=2, sort_keys=True)
        handle.write("\n")

    print(f"\nSaved benchmark results to {os.path.relpath(output_path)}")


if __name__ == "__main__":
    main()
