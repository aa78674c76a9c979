import random
from dataclasses import replace
from typing import AbstractSet, List, Sequence

from .model import Candidate

NO_LOCKS: AbstractSet[int] = frozenset()


def tournament_select(population: Sequence[Candidate], rng: random.Random, size: int = 5) -> Candidate:
    """Mejor de `size` candidatos tomados al azar (con reposición). Empates: el primero."""
    best = None
    for _ in range(size):
        cand = rng.choice(population)
        if best is None or cand.fitness > best.fitness:
            best = cand
    return best


def single_point_crossover(
    p1: Candidate,
    p2: Candidate,
    rng: random.Random,
    locked: AbstractSet[int] = NO_LOCKS,
) -> Candidate:
    """
    Prefijo de p1 hasta el corte + sufijo de p2 desde el corte.

    `locked` son las posiciones i donde no se puede cortar entre i-1 e i
    (segundo periodo de un laboratorio); el corte retrocede una posición.
    """
    cut = rng.randrange(len(p1.schedule)) if p1.schedule else 0
    if cut in locked:
        cut -= 1
    # el slicing recorta solo si p2 es más corto que el corte
    return Candidate(schedule=p1.schedule[:cut] + p2.schedule[cut:])


def mutate(
    cand: Candidate,
    n_days: int,
    n_periods: int,
    mutation_rate: float,
    rng: random.Random,
    locked: AbstractSet[int] = NO_LOCKS,
) -> Candidate:
    """
    Reubica cada asignación (día y periodo) con probabilidad `mutation_rate`.
    Un par de laboratorio se mueve entero, a otro par de periodos seguidos.
    """
    genes: List = list(cand.schedule)
    for i, g in enumerate(genes):
        if i in locked:
            continue
        if rng.random() >= mutation_rate:
            continue
        if i + 1 in locked and i + 1 < len(genes):
            day, period = rng.randrange(n_days), rng.randrange(n_periods - 1)
            genes[i] = replace(g, day=day, period=period)
            genes[i + 1] = replace(genes[i + 1], day=day, period=period + 1)
        else:
            genes[i] = replace(g, day=rng.randrange(n_days), period=rng.randrange(n_periods))
    return Candidate(schedule=tuple(genes))
