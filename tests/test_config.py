import json

import pytest

from schedlab.config import RunConfig, load_config, load_run_config
from schedlab.errors import InvalidConfiguration


def test_defaults_from_minimal_mapping() -> None:
    config = RunConfig.from_dict({"instance": "data/neh.data.txt"})
    assert config.format == "flowshop"
    assert config.algorithms == ["qneh"]
    assert config.datasets is None
    assert config.sa.cycles == 100000
    assert config.sa.track_best is False
    assert config.max_jobs == 20
    assert config.output.dir == "results"


def test_single_algorithm_string_is_accepted() -> None:
    config = RunConfig.from_dict({"instance": "x", "algorithms": "neh"})
    assert config.algorithms == ["neh"]


@pytest.mark.parametrize(
    "cfg",
    [
        {"instance": "x", "format": "jobshop"},
        {"instance": "x", "algorithms": ["witi"]},
        {"instance": "x", "format": "witi", "algorithms": ["sa"]},
        {"instance": "x", "algorithms": []},
        {"algorithms": ["neh"]},
        {"instance": "x", "sa": {"cycles": -1}},
        {"instance": "x", "sa": {"samples": 0}},
        {"instance": "x", "sa": {"cycles": "many"}},
        {"instance": "x", "witi": {"max_jobs": 0}},
    ],
)
def test_invalid_configuration(cfg: dict) -> None:
    with pytest.raises(InvalidConfiguration):
        RunConfig.from_dict(cfg)


def test_generator_replaces_instance() -> None:
    config = RunConfig.from_dict({"generator": {"enabled": True, "n": 8, "m": 3}})
    assert config.instance is None
    assert (config.generator.n, config.generator.m) == (8, 3)


def test_load_yaml_config(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "instance: data/witi.data.txt\n"
        "format: witi\n"
        "algorithms: [witi]\n"
        "witi:\n"
        "  max_jobs: 12\n",
        encoding="utf-8",
    )
    config = load_run_config(str(path))
    assert config.format == "witi"
    assert config.max_jobs == 12


def test_load_json_config(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"instance": "a.txt", "seed": 3}), encoding="utf-8")
    assert load_config(str(path)) == {"instance": "a.txt", "seed": 3}


def test_top_level_must_be_mapping(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("- neh\n- qneh\n", encoding="utf-8")
    with pytest.raises(InvalidConfiguration):
        load_config(str(path))
