"""End-to-end runs of the config driven CLI."""

from __future__ import annotations

from pathlib import Path

import pytest

from schedlab.config import RunConfig
from schedlab.errors import InvalidConfiguration
from schedlab.main import cli, load_datasets, run
from schedlab.reporting import read_summary_csv


def write_config(tmp_path: Path, body: str) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(body, encoding="utf-8")
    return str(path)


def test_flowshop_run_writes_summary_and_charts(tmp_path: Path, data_dir: Path) -> None:
    out_dir = tmp_path / "results"
    config_path = write_config(
        tmp_path,
        f"instance: {data_dir / 'neh.data.txt'}\n"
        "format: flowshop\n"
        "algorithms: [neh, qneh, sa]\n"
        "seed: 1\n"
        "sa:\n"
        "  cycles: 200\n"
        "  samples: 20\n"
        "  trace_every: 50\n"
        "output:\n"
        f"  dir: {out_dir}\n"
        "  gantt: true\n"
        "  trace: true\n",
    )
    cli(["--config", config_path])

    rows = read_summary_csv(out_dir / "summary.csv")
    assert [(r["dataset"], r["algorithm"]) for r in rows] == [
        ("data.000", "neh"),
        ("data.000", "qneh"),
        ("data.000", "sa"),
        ("data.001", "neh"),
        ("data.001", "qneh"),
        ("data.001", "sa"),
    ]
    by_key = {(r["dataset"], r["algorithm"]): r for r in rows}
    assert by_key[("data.000", "qneh")]["objective"] == "10"
    assert by_key[("data.001", "neh")]["sequence"] == "1 4 3 2"
    assert float(by_key[("data.001", "qneh")]["gap_percent"]) == 0.0
    assert (out_dir / "gantt_qneh_data.001.png").is_file()
    assert (out_dir / "trace_sa_data.000.csv").is_file()
    assert (out_dir / "sa_trace_data.001.png").is_file()


def test_tardiness_run(tmp_path: Path, data_dir: Path) -> None:
    config = RunConfig.from_dict(
        {
            "instance": str(data_dir / "witi.data.txt"),
            "format": "witi",
            "algorithms": ["witi"],
            "output": {"dir": str(tmp_path)},
        }
    )
    (row,) = run(config)
    assert row.objective == 6
    assert row.sequence == "3 2 1"
    assert row.gap_percent() == 0.0


def test_generated_instance(tmp_path: Path) -> None:
    config = RunConfig.from_dict(
        {
            "generator": {"enabled": True, "n": 6, "m": 3, "seed": 4},
            "algorithms": ["neh", "qneh"],
            "output": {"dir": str(tmp_path)},
        }
    )
    slow, fast = run(config)
    assert slow.objective == fast.objective
    assert slow.jobs == 6 and slow.machines == 3


def test_dataset_selection(data_dir: Path) -> None:
    config = RunConfig.from_dict({"instance": str(data_dir / "neh.data.txt"), "datasets": [1]})
    (dataset,) = load_datasets(config)
    assert dataset.name == "data.001"
    bad = RunConfig.from_dict({"instance": str(data_dir / "neh.data.txt"), "datasets": [5]})
    with pytest.raises(InvalidConfiguration):
        load_datasets(bad)


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        cli(["--config", str(tmp_path / "nope.yaml")])


def test_trace_output_without_gantt(tmp_path: Path, data_dir: Path) -> None:
    config = RunConfig.from_dict(
        {
            "instance": str(data_dir / "neh.data.txt"),
            "algorithms": ["sa"],
            "datasets": [0],
            "seed": 3,
            "sa": {"cycles": 100, "samples": 10},
            "output": {"dir": str(tmp_path), "gantt": False, "trace": True},
        }
    )
    run(config)
    assert (tmp_path / "trace_sa_data.000.csv").is_file()
    assert (tmp_path / "sa_trace_data.000.png").is_file()
    assert not list(tmp_path.glob("gantt_*.png"))


def test_zero_cycles_run_completes(tmp_path: Path, data_dir: Path) -> None:
    config = RunConfig.from_dict(
        {
            "instance": str(data_dir / "neh.data.txt"),
            "algorithms": ["qneh", "sa"],
            "seed": 0,
            "sa": {"cycles": 0, "samples": 10},
            "output": {"dir": str(tmp_path)},
        }
    )
    rows = run(config)
    assert [row.algorithm for row in rows] == ["qneh", "sa", "qneh", "sa"]
    assert rows[1].sequence == "1 2 3"
    assert len(read_summary_csv(tmp_path / "summary.csv")) == 4
