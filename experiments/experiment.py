"""
Experiment utilities for running constrained grid searches.

The ``Experiment`` class runs named search configurations from ``crucible_routing``
against one grid, records metrics and solutions, and optionally saves images.
"""

from __future__ import annotations

import csv
import json
import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, UTC
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional
from uuid import uuid4

import pandas as pd

from crucible_routing import ConstrainedPathSearch, Grid, SearchResult, UnreachableError
from crucible_routing.ConstrainedRouter import MAX_RUN
from crucible_routing.metrics import summarize
from crucible_routing.visualize import visualize

logger = logging.getLogger(__name__)

RunnerType = Callable[[Grid, "SearchConfiguration"], SearchResult]


@dataclass
class SearchConfiguration:
    """Run-length limits and labels for one search run."""

    name: str
    max_run: int = MAX_RUN
    min_run: int = 1
    metadata: Dict[str, Any] = field(default_factory=dict)
    runner: Optional[RunnerType] = None

    def search_kwargs(self) -> Dict[str, int]:
        return {"max_run": int(self.max_run), "min_run": int(self.min_run)}


@dataclass
class RunResult:
    """Summary of a single search execution."""

    run_id: str
    config_name: str
    timestamp: str
    metrics: Dict[str, Any]
    metadata: Mapping[str, Any]
    config_snapshot: Mapping[str, Any]
    result: Optional[SearchResult]
    metrics_path: Path
    solution_path: Path
    image_path: Optional[Path]
    manifest_path: Path
    grid_path: Path


class Experiment:
    """Runs search configurations over one grid and manages outputs on disk."""

    def __init__(self, name: str, grid: Grid, output_dir: Path | str) -> None:
        self.name = name
        self.grid = grid
        self.output_root = Path(output_dir).expanduser()
        self.experiment_dir = self.output_root / self.name
        self.metrics_dir = self.experiment_dir / "metrics"
        self.images_dir = self.experiment_dir / "images"
        self.solutions_dir = self.experiment_dir / "solutions"
        self.grid_path = self.experiment_dir / "grid.txt"
        self.definition_path = self.experiment_dir / "experiment.json"
        self.manifest_path = self.experiment_dir / "metrics_log.csv"
        self._ensure_directories()

        self._configurations: Dict[str, SearchConfiguration] = {}
        self.history: Dict[str, RunResult] = {}
        self._manifest_fieldnames: Optional[List[str]] = None
        self._write_grid()
        self._write_experiment_definition()

    def add_configuration(self, config: SearchConfiguration) -> None:
        """Register a search configuration by name."""
        if config.name in self._configurations:
            raise ValueError(f"Configuration {config.name!r} already exists.")
        self._configurations[config.name] = config
        logger.debug("Configuration %s registered.", config.name)
        self._write_experiment_definition()

    def add_configurations(self, configs: Iterable[SearchConfiguration]) -> None:
        for config in configs:
            self.add_configuration(config)

    def remove_configuration(self, name: str) -> None:
        self._configurations.pop(name, None)
        self.history.pop(name, None)
        logger.debug("Configuration %s removed.", name)
        self._write_experiment_definition()

    @property
    def configurations(self) -> List[SearchConfiguration]:
        return list(self._configurations.values())

    def run_configuration(
        self,
        name: str,
        *,
        save_image: bool = False,
        show_image: bool = False,
    ) -> RunResult:
        """Execute a single configuration.

        An unreachable goal is recorded in the metrics rather than raised.
        """
        config = self._configurations.get(name)
        if config is None:
            raise KeyError(f"Configuration {name!r} is not registered.")

        logger.info(
            "Running configuration %s (runs %s..%s).", name, config.min_run, config.max_run
        )
        result = self._execute(config)
        metrics = summarize(result)
        timestamp = self._timestamp()
        run_id = self._generate_run_id()
        config_snapshot = self._config_snapshot(config)

        metrics_path = self._write_metrics(config_snapshot, metrics, timestamp, run_id)
        solution_path = self._write_solution(config_snapshot, result, timestamp, run_id)

        image_path: Optional[Path] = None
        path = result.path if result else None
        if save_image:
            image_path = self.images_dir / f"{config.name}_{timestamp}_{run_id}.png"
            visualize(self.grid, path, show=show_image, save_path=str(image_path), title=config.name)
        elif show_image:
            visualize(self.grid, path, show=True, save_path=None, title=config.name)

        self._append_manifest(
            run_id=run_id,
            config_snapshot=config_snapshot,
            timestamp=timestamp,
            metrics=metrics,
            metrics_path=metrics_path,
            solution_path=solution_path,
            image_path=image_path,
        )

        run = RunResult(
            run_id=run_id,
            config_name=config.name,
            timestamp=timestamp,
            metrics=metrics,
            metadata=config.metadata,
            config_snapshot=config_snapshot,
            result=result,
            metrics_path=metrics_path,
            solution_path=solution_path,
            image_path=image_path,
            manifest_path=self.manifest_path,
            grid_path=self.grid_path,
        )
        self.history[config.name] = run
        logger.info("Configuration %s completed.", name)
        return run

    def run_all(
        self,
        config_names: Iterable[str] | None = None,
        *,
        save_images: bool = False,
        show_images: bool = False,
    ) -> List[RunResult]:
        """Execute multiple configurations, returning the collected results."""
        names = list(config_names) if config_names is not None else list(self._configurations.keys())
        return [
            self.run_configuration(name, save_image=save_images, show_image=show_images)
            for name in names
        ]

    def _execute(self, config: SearchConfiguration) -> Optional[SearchResult]:
        try:
            if config.runner is not None:
                return config.runner(self.grid, config)
            return ConstrainedPathSearch(self.grid, **config.search_kwargs()).run()
        except UnreachableError as exc:
            logger.warning("Configuration %s found no path: %s", config.name, exc)
            return None

    def _write_metrics(
        self,
        config_snapshot: Mapping[str, Any],
        metrics: Dict[str, Any],
        timestamp: str,
        run_id: str,
    ) -> Path:
        payload = {
            "experiment": self.name,
            "run_id": run_id,
            "name": config_snapshot["name"],
            "config": config_snapshot,
            "timestamp": timestamp,
            "metrics": metrics,
        }
        path = self.metrics_dir / f"{config_snapshot['name']}_{timestamp}_{run_id}.json"
        with path.open("w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2)
        return path

    def _write_solution(
        self,
        config_snapshot: Mapping[str, Any],
        result: Optional[SearchResult],
        timestamp: str,
        run_id: str,
    ) -> Path:
        path = self.solutions_dir / f"{config_snapshot['name']}_{timestamp}_{run_id}.json"
        payload = {
            "experiment": self.name,
            "run_id": run_id,
            "config": config_snapshot,
            "timestamp": timestamp,
            "width": self.grid.width,
            "height": self.grid.height,
            "reachable": result is not None,
            "cost": result.cost if result else None,
            "path": [list(c) for c in result.path] if result else [],
            "states": [
                {
                    "coord": list(s.coord),
                    "direction": s.direction.name if s.direction else None,
                    "run": s.run,
                }
                for s in (result.states if result else [])
            ],
        }
        with path.open("w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2)
        return path

    def _ensure_directories(self) -> None:
        self.experiment_dir.mkdir(parents=True, exist_ok=True)
        for directory in (self.metrics_dir, self.images_dir, self.solutions_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def _append_manifest(
        self,
        *,
        run_id: str,
        config_snapshot: Mapping[str, Any],
        timestamp: str,
        metrics: Mapping[str, Any],
        metrics_path: Path,
        solution_path: Path,
        image_path: Optional[Path],
    ) -> None:
        fieldnames = self._manifest_fieldnames or self._build_manifest_fieldnames(metrics)
        self._ensure_manifest_header(fieldnames)
        row: Dict[str, Any] = {
            "experiment_name": self.name,
            "config_name": config_snapshot["name"],
            "run_id": run_id,
            "timestamp": timestamp,
            "max_run": config_snapshot["max_run"],
            "min_run": config_snapshot["min_run"],
            "metrics_path": str(metrics_path),
            "solution_path": str(solution_path),
            "image_path": str(image_path) if image_path else "",
            "config_json": json.dumps(config_snapshot, ensure_ascii=False),
        }
        row.update(metrics)
        with self.manifest_path.open("a", newline="", encoding="utf-8") as fh:
            writer = csv.DictWriter(fh, fieldnames=fieldnames, extrasaction="ignore")
            writer.writerow(row)

    def _write_experiment_definition(self) -> None:
        self.definition_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "name": self.name,
            "output_dir": str(self.output_root),
            "grid_file": self.grid_path.name,
            "configs": [self._config_snapshot(cfg) for cfg in self._configurations.values()],
        }
        with self.definition_path.open("w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2)

    def _build_manifest_fieldnames(self, metrics: Mapping[str, Any]) -> List[str]:
        base = [
            "experiment_name",
            "config_name",
            "run_id",
            "timestamp",
            "max_run",
            "min_run",
            "metrics_path",
            "solution_path",
            "image_path",
            "config_json",
        ]
        fieldnames = base + sorted(metrics.keys())
        self._manifest_fieldnames = fieldnames
        return fieldnames

    def _ensure_manifest_header(self, fieldnames: List[str]) -> None:
        if not self.manifest_path.exists():
            self.manifest_path.parent.mkdir(parents=True, exist_ok=True)
            with self.manifest_path.open("w", newline="", encoding="utf-8") as fh:
                writer = csv.DictWriter(fh, fieldnames=fieldnames)
                writer.writeheader()

    @staticmethod
    def _config_snapshot(config: SearchConfiguration) -> Dict[str, Any]:
        return {
            "name": config.name,
            "max_run": int(config.max_run),
            "min_run": int(config.min_run),
            "metadata": dict(config.metadata),
        }

    def _write_grid(self) -> None:
        text = str(self.grid) + "\n"
        if self.grid_path.exists():
            if self.grid_path.read_text(encoding="utf-8") != text:
                raise ValueError(
                    f"Experiment {self.name!r} already holds a different grid at {self.grid_path}"
                )
            return
        self.grid_path.write_text(text, encoding="utf-8")

    @classmethod
    def load_from_directory(cls, directory: Path | str) -> "Experiment":
        directory_path = Path(directory).expanduser()
        definition_file = directory_path / "experiment.json"
        if not definition_file.exists():
            raise FileNotFoundError(f"Experiment definition not found at {definition_file}")

        with definition_file.open("r", encoding="utf-8") as fh:
            definition = json.load(fh)

        name = definition.get("name") or directory_path.name
        grid_path = directory_path / definition.get("grid_file", "grid.txt")
        if not grid_path.exists():
            raise FileNotFoundError(f"Grid not found at {grid_path}")
        grid = Grid.parse(grid_path.read_text(encoding="utf-8"))

        experiment = cls(name=name, grid=grid, output_dir=directory_path.parent)
        for cfg_data in definition.get("configs", []):
            config = SearchConfiguration(
                name=cfg_data["name"],
                max_run=int(cfg_data.get("max_run", MAX_RUN)),
                min_run=int(cfg_data.get("min_run", 1)),
                metadata=dict(cfg_data.get("metadata", {})),
            )
            experiment._configurations[config.name] = config

        experiment._write_experiment_definition()
        return experiment

    @staticmethod
    def _generate_run_id() -> str:
        return uuid4().hex[:12]

    @staticmethod
    def _timestamp() -> str:
        return datetime.now(UTC).strftime("%Y%m%d_%H%M%S")

    @staticmethod
    def generate_random_grid(
        width: int,
        height: int,
        *,
        low: int = 1,
        high: int = 9,
        seed: int | None = None,
    ) -> Grid:
        """Build a grid of uniformly random single-digit costs in [low, high]."""
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be positive")
        if not (0 <= low <= high <= 9):
            raise ValueError("costs must satisfy 0 <= low <= high <= 9")
        rng = random.Random(seed)
        return Grid.from_rows(
            [[rng.randint(low, high) for _ in range(width)] for _ in range(height)]
        )

    @staticmethod
    def load_all_metrics(root_dir: Path | str) -> "pd.DataFrame":
        """Load metrics_log.csv from all experiments under a root directory."""
        root = Path(root_dir)
        frames: List["pd.DataFrame"] = []
        for csv_path in root.glob("*/metrics_log.csv"):
            frames.append(pd.read_csv(csv_path))
        if not frames:
            return pd.DataFrame()
        return pd.concat(frames, ignore_index=True)
