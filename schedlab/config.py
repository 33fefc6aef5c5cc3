"""Run configuration loaded from a YAML (or JSON) file.

Example::

    log_level: INFO
    instance: data/neh.data.txt
    format: flowshop          # flowshop | witi
    algorithms: [neh, qneh, sa]
    datasets: [0, 1, 2]       # optional indices into the file
    seed: 42
    generator:                # used instead of ``instance`` when enabled
      enabled: false
      n: 20
      m: 5
      seed: 0
    sa:
      cycles: 100000
      samples: 1000
      track_best: false
      trace_every: 100
    witi:
      max_jobs: 20
    output:
      dir: results
      gantt: false            # Gantt chart per result
      trace: false            # SA trace CSV + plot
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from schedlab.errors import InvalidConfiguration
from schedlab.parser import FLOWSHOP, TARDINESS

FLOWSHOP_ALGORITHMS = ("neh", "qneh", "sa")
TARDINESS_ALGORITHMS = ("witi",)


@dataclass(frozen=True)
class AnnealingParams:
    cycles: int = 100000
    samples: int = 1000
    track_best: bool = False
    trace_every: int = 100


@dataclass(frozen=True)
class GeneratorParams:
    enabled: bool = False
    n: int = 20
    m: int = 5
    seed: int = 0


@dataclass(frozen=True)
class OutputParams:
    dir: str = "results"
    gantt: bool = False
    trace: bool = False


@dataclass(frozen=True)
class RunConfig:
    """Validated settings for one CLI run."""

    instance: Optional[str]
    format: str = FLOWSHOP
    algorithms: List[str] = field(default_factory=lambda: ["qneh"])
    datasets: Optional[List[int]] = None
    seed: Optional[int] = None
    log_level: str = "INFO"
    max_jobs: int = 20
    sa: AnnealingParams = field(default_factory=AnnealingParams)
    generator: GeneratorParams = field(default_factory=GeneratorParams)
    output: OutputParams = field(default_factory=OutputParams)

    def __post_init__(self) -> None:
        if self.format not in (FLOWSHOP, TARDINESS):
            raise InvalidConfiguration(f"Unknown format: {self.format!r}")
        allowed = FLOWSHOP_ALGORITHMS if self.format == FLOWSHOP else TARDINESS_ALGORITHMS
        if not self.algorithms:
            raise InvalidConfiguration("algorithms list must be non-empty")
        for name in self.algorithms:
            if name not in allowed:
                raise InvalidConfiguration(
                    f"Algorithm {name!r} not available for format {self.format!r}; "
                    f"use one of {allowed}"
                )
        if not self.instance and not self.generator.enabled:
            raise InvalidConfiguration("Missing 'instance' key (or enable 'generator')")
        if self.sa.cycles < 0:
            raise InvalidConfiguration("sa.cycles must be >= 0")
        if self.sa.samples < 1:
            raise InvalidConfiguration("sa.samples must be >= 1")
        if self.max_jobs < 1:
            raise InvalidConfiguration("witi.max_jobs must be >= 1")

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "RunConfig":
        sa_cfg = cfg.get("sa", {}) if isinstance(cfg.get("sa"), dict) else {}
        witi_cfg = cfg.get("witi", {}) if isinstance(cfg.get("witi"), dict) else {}
        gen_cfg = cfg.get("generator", {}) if isinstance(cfg.get("generator"), dict) else {}
        out_cfg = cfg.get("output", {}) if isinstance(cfg.get("output"), dict) else {}
        algorithms = cfg.get("algorithms", ["qneh"])
        if isinstance(algorithms, str):
            algorithms = [algorithms]
        datasets = cfg.get("datasets")
        try:
            return cls(
                instance=cfg.get("instance"),
                format=str(cfg.get("format", FLOWSHOP)),
                algorithms=[str(a) for a in algorithms],
                datasets=[int(i) for i in datasets] if datasets is not None else None,
                seed=cfg.get("seed"),
                log_level=str(cfg.get("log_level", "INFO")),
                max_jobs=int(witi_cfg.get("max_jobs", 20)),
                sa=AnnealingParams(
                    cycles=int(sa_cfg.get("cycles", 100000)),
                    samples=int(sa_cfg.get("samples", 1000)),
                    track_best=bool(sa_cfg.get("track_best", False)),
                    trace_every=int(sa_cfg.get("trace_every", 100)),
                ),
                generator=GeneratorParams(
                    enabled=bool(gen_cfg.get("enabled", False)),
                    n=int(gen_cfg.get("n", 20)),
                    m=int(gen_cfg.get("m", 5)),
                    seed=int(gen_cfg.get("seed", 0)),
                ),
                output=OutputParams(
                    dir=str(out_cfg.get("dir", "results")),
                    gantt=bool(out_cfg.get("gantt", False)),
                    trace=bool(out_cfg.get("trace", False)),
                ),
            )
        except InvalidConfiguration:
            raise
        except (TypeError, ValueError) as e:
            raise InvalidConfiguration(f"Invalid configuration value: {e}") from e


def load_config(config_file: str) -> Dict[str, Any]:
    """Load a configuration mapping from a YAML or JSON file."""
    with open(config_file, "r", encoding="utf-8") as f:
        text = f.read()
    if config_file.endswith(".json"):
        cfg = json.loads(text)
    else:
        cfg = yaml.safe_load(text) or {}
    if not isinstance(cfg, dict):
        raise InvalidConfiguration(f"{config_file}: top level must be a mapping")
    return cfg


def load_run_config(config_file: str) -> RunConfig:
    return RunConfig.from_dict(load_config(config_file))
