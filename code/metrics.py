"""Helpers for collecting instrumentation data during dungeon generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict


@dataclass
class PhaseMetrics:
    """Aggregated timing for a single generation phase across invocations."""

    name: str
    invocations: int = 0
    total_time: float = 0.0

    def record(self, duration: float) -> None:
        self.invocations += 1
        self.total_time += duration

    def to_dict(self) -> Dict[str, float | int]:
        average_time = self.total_time / self.invocations if self.invocations else 0.0
        return {
            "invocations": self.invocations,
            "total_time": self.total_time,
            "average_time": average_time,
        }


@dataclass
class GenerationMetrics:
    """Container for phase timings and placement counters recorded during a generation run."""

    phases: Dict[str, PhaseMetrics] = field(default_factory=dict)
    rooms_placed: int = 0
    candidate_rooms: int = 0
    connectors_blocked: int = 0
    connectors_skipped: int = 0
    doors_healed: int = 0
    cells_sealed: int = 0

    def record_phase(self, name: str, duration: float) -> None:
        metrics = self.phases.get(name)
        if metrics is None:
            metrics = PhaseMetrics(name=name)
            self.phases[name] = metrics
        metrics.record(duration)

    def counters(self) -> Dict[str, int]:
        return {
            "rooms_placed": self.rooms_placed,
            "candidate_rooms": self.candidate_rooms,
            "connectors_blocked": self.connectors_blocked,
            "connectors_skipped": self.connectors_skipped,
            "doors_healed": self.doors_healed,
            "cells_sealed": self.cells_sealed,
        }

    def snapshot(self) -> Dict[str, Dict[str, float | int]]:
        result: Dict[str, Dict[str, float | int]] = {
            name: metrics.to_dict() for name, metrics in self.phases.items()
        }
        result["counters"] = dict(self.counters())
        return result
