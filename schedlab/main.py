import argparse
import logging
import random
import time
from pathlib import Path
from typing import List, Optional

from schedlab.algorithms.neh import neh, qneh
from schedlab.algorithms.sa import simulated_annealing
from schedlab.algorithms.witi import exact_weighted_tardiness
from schedlab.config import RunConfig, load_run_config
from schedlab.errors import InvalidConfiguration
from schedlab.generator import generate_flowshop_instance, generate_tardiness_instance
from schedlab.models import Dataset, ScheduleResult, validate_sequence
from schedlab.parser import FLOWSHOP, load_instances
from schedlab.reporting import ResultRow, format_result, write_summary_csv
from schedlab.visualization import save_annealing_trace, save_gantt_chart


def load_datasets(config: RunConfig) -> List[Dataset]:
    """Read (or generate) the datasets selected by ``config``."""
    gen = config.generator
    if gen.enabled:
        if config.format == FLOWSHOP:
            datasets = [generate_flowshop_instance(gen.n, gen.m, gen.seed)]
        else:
            datasets = [generate_tardiness_instance(gen.n, gen.seed)]
    else:
        datasets = load_instances(config.instance, config.format)
    if config.datasets is None:
        return datasets
    selected = []
    for index in config.datasets:
        if index < 0 or index >= len(datasets):
            raise InvalidConfiguration(
                f"dataset index {index} out of range (file has {len(datasets)})"
            )
        selected.append(datasets[index])
    return selected


def run_algorithm(
    name: str,
    dataset: Dataset,
    config: RunConfig,
    out_dir: Path,
) -> ScheduleResult:
    """Execute one algorithm on one dataset."""
    if name == "neh":
        return neh(dataset)
    if name == "qneh":
        return qneh(dataset)
    if name == "witi":
        return exact_weighted_tardiness(dataset, max_jobs=config.max_jobs)
    if name == "sa":
        rng = random.Random(config.seed) if config.seed is not None else random.Random()
        trace_path = str(out_dir / f"trace_sa_{dataset.name}.csv") if config.output.trace else None
        history: list[tuple[int, int]] = []
        result = simulated_annealing(
            dataset,
            cycles=config.sa.cycles,
            samples=config.sa.samples,
            rng=rng,
            track_best=config.sa.track_best,
            trace_every=config.sa.trace_every,
            trace_path=trace_path,
            history=history,
        )
        if config.output.trace:
            save_annealing_trace(
                history,
                str(out_dir / f"sa_trace_{dataset.name}.png"),
                title=f"SA - {dataset.name}",
                reference=dataset.reference.objective if dataset.reference else None,
            )
        return result
    raise InvalidConfiguration(f"Unknown algorithm: {name}")


def run(config: RunConfig) -> List[ResultRow]:
    logger = logging.getLogger("schedlab")
    out_dir = Path(config.output.dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    datasets = load_datasets(config)
    logger.info(
        "Loaded %d dataset(s) format=%s algorithms=%s",
        len(datasets),
        config.format,
        ",".join(config.algorithms),
    )
    rows: List[ResultRow] = []
    total_ms = 0.0
    for dataset in datasets:
        logger.info(
            "Instance: %s jobs=%d machines=%d",
            dataset.name,
            dataset.jobs_number,
            dataset.machines_number,
        )
        for name in config.algorithms:
            t0 = time.perf_counter()
            result = run_algorithm(name, dataset, config, out_dir)
            elapsed_ms = (time.perf_counter() - t0) * 1000.0
            total_ms += elapsed_ms
            validate_sequence(dataset, result.sequence)
            logger.info(format_result(dataset, result, elapsed_ms))
            rows.append(ResultRow.from_result(dataset, result, elapsed_ms))
            if config.output.gantt and config.format == FLOWSHOP:
                save_gantt_chart(
                    dataset,
                    result.sequence,
                    str(out_dir / f"gantt_{name}_{dataset.name}.png"),
                    title=f"{name} - {dataset.name} - Cmax = {result.objective}",
                )
    summary_path = write_summary_csv(rows, out_dir / "summary.csv")
    logger.info("Summary written to %s (total %.1f ms)", summary_path, total_ms)
    return rows


def cli(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Scheduling lab algorithms (config driven)")
    parser.add_argument(
        "--config",
        required=True,
        help="Path to the YAML/JSON configuration file",
    )
    args = parser.parse_args(argv)

    if not Path(args.config).is_file():
        raise FileNotFoundError(f"Config file not found: {args.config}")
    config = load_run_config(args.config)

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run(config)


if __name__ == "__main__":
    cli()
