from schedlab.algorithms.neh import qneh
from schedlab.models import Dataset
from schedlab.visualization import save_annealing_trace, save_gantt_chart


def test_gantt_chart_is_written(tmp_path) -> None:
    data = Dataset.from_durations([[3, 2], [1, 4], [5, 1]], name="scenario")
    result = qneh(data)
    path = save_gantt_chart(data, result.sequence, str(tmp_path / "charts" / "gantt.png"))
    assert (tmp_path / "charts" / "gantt.png").stat().st_size > 0
    assert path.endswith("gantt.png")


def test_annealing_trace_is_written(tmp_path) -> None:
    history = [(0, 30), (100, 27), (200, 25)]
    path = save_annealing_trace(history, str(tmp_path / "trace.png"), reference=24)
    assert (tmp_path / "trace.png").stat().st_size > 0
    assert path == str(tmp_path / "trace.png")
