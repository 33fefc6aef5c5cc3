import random

from schedlab.models import Dataset, Job


def generate_flowshop_instance(n: int, m: int, seed: int = 0) -> Dataset:
    """Generate a Taillard benchmark-like flow shop instance (durations U[1, 99])."""
    rng = random.Random(seed)
    durations = [[rng.randint(1, 99) for _ in range(m)] for _ in range(n)]  # n jobs x m machines
    return Dataset.from_durations(durations, name=f"generated_n{n}_m{m}_seed{seed}")


def generate_tardiness_instance(n: int, seed: int = 0) -> Dataset:
    """Generate a single-machine weighted tardiness instance.

    Processing times U[1, 99], weights U[1, 10], due dates U[0.2·P, 0.8·P]
    where P is the total processing time.
    """
    rng = random.Random(seed)
    processing_times = [rng.randint(1, 99) for _ in range(n)]
    total = sum(processing_times)
    jobs = tuple(
        Job(
            id=k,
            durations=(p,),
            weight=rng.randint(1, 10),
            due_time=rng.randint(int(0.2 * total), int(0.8 * total)),
        )
        for k, p in enumerate(processing_times, start=1)
    )
    return Dataset(jobs=jobs, machines_number=1, name=f"generated_witi_n{n}_seed{seed}")
