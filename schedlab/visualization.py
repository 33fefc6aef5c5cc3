import logging
import os
from typing import List, Optional, Sequence, Tuple

import matplotlib

matplotlib.use("Agg")  # Must be set before importing pyplot
import matplotlib.pyplot as plt  # noqa: E402

from schedlab.makespan import MakespanEvaluator  # noqa: E402
from schedlab.models import Dataset  # noqa: E402


def _ensure_dir(path: str):
    if path:
        os.makedirs(path, exist_ok=True)


def save_gantt_chart(
    dataset: Dataset,
    sequence: Sequence[int],
    filepath: str,
    title: Optional[str] = None,
    show_legend: Optional[bool] = None,
) -> str:
    """Create and save a flow-shop Gantt chart for ``sequence``.

    - Adaptive figure size based on number of machines and jobs.
    - Legend disabled automatically for more than 40 jobs unless forced.
    """
    m = dataset.machines_number
    n = len(sequence)
    completion = MakespanEvaluator(dataset).completion_matrix(sequence)
    cmax = completion[m - 1][n - 1] if n else 0

    base_w, base_h = 10, 0.5 * m + 2
    fig, ax = plt.subplots(
        figsize=(min(base_w + n * 0.05, 18), min(base_h, 16)),
        constrained_layout=True,
    )
    cmap = plt.get_cmap("tab20")
    colors = {job_id: cmap((job_id - 1) % 20) for job_id in sequence}
    for i in range(m):
        for j, job_id in enumerate(sequence):
            duration = dataset.job(job_id).durations[i]
            ax.barh(
                i,
                duration,
                left=completion[i][j] - duration,
                height=0.8,
                color=colors[job_id],
                alpha=0.85,
                edgecolor="black",
                linewidth=0.6,
            )
    ax.set_xlabel("Time", fontsize=12)
    ax.set_ylabel("Machine", fontsize=12)
    ax.set_title(title or f"{dataset.name} - Cmax = {cmax}", fontsize=14, fontweight="bold")
    ax.set_yticks(range(m))
    ax.set_yticklabels([f"M{i + 1}" for i in range(m)])
    ax.grid(True, alpha=0.25, axis="x", linestyle="--", linewidth=0.7)
    ax.set_ylim(-0.5, m - 0.5)
    ax.invert_yaxis()

    if show_legend is None:
        show_legend = n <= 40
    if show_legend:
        legend_elements = [
            plt.Rectangle(
                (0, 0),
                1,
                1,
                facecolor=colors[job_id],
                alpha=0.85,
                edgecolor="black",
                label=f"Job {job_id}",
            )
            for job_id in sequence
        ]
        ax.legend(
            handles=legend_elements,
            bbox_to_anchor=(1.02, 1),
            loc="upper left",
            borderaxespad=0.0,
            fontsize=8,
            frameon=False,
            ncol=1 if n <= 25 else 2,
        )

    _ensure_dir(os.path.dirname(filepath))
    fig.savefig(filepath, dpi=180)
    plt.close(fig)
    logging.getLogger("schedlab").info("Gantt chart saved as: %s", filepath)
    return filepath


def save_annealing_trace(
    history: List[Tuple[int, int]],
    filepath: str,
    title: str = "Simulated annealing",
    reference: Optional[int] = None,
) -> str:
    """Plot current Cmax against iteration for one annealing run."""
    fig, ax = plt.subplots(figsize=(10, 6), constrained_layout=True)
    iterations = [it for it, _ in history]
    cmax_values = [c for _, c in history]
    ax.plot(iterations, cmax_values, linewidth=1.5, color="#1f77b4", label="current Cmax")
    if cmax_values:
        ax.annotate(
            f"{cmax_values[-1]}",
            xy=(iterations[-1], cmax_values[-1]),
            xytext=(6, -10),
            textcoords="offset points",
            fontsize=9,
            bbox=dict(boxstyle="round,pad=0.2", facecolor="white", alpha=0.55),
        )
    if reference is not None:
        ax.axhline(y=reference, color="red", linestyle="--", linewidth=1.2, label="reference")
    ax.set_xlabel("Iteration", fontsize=12)
    ax.set_ylabel("Cmax", fontsize=12)
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.grid(True, alpha=0.25, linestyle="--", linewidth=0.7)
    ax.legend(loc="upper right", frameon=False, fontsize=9)

    _ensure_dir(os.path.dirname(filepath))
    fig.savefig(filepath, dpi=180)
    plt.close(fig)
    logging.getLogger("schedlab").info("Annealing trace saved as: %s", filepath)
    return filepath
