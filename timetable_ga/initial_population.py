# timetable_ga/initial_population.py
import random
from typing import FrozenSet, List, Optional, Sequence, Set

from .domains import SubjectDomain
from .model import DAYS, Assignment, Candidate, RuleSet

LAB_PERIODS = 2


def _has_free_slot(n_days: int, n_periods: int, rules: RuleSet) -> bool:
    return any(
        not rules.is_restricted(DAYS[d], p)
        for d in range(n_days)
        for p in range(n_periods)
    )


def placeable(dom: SubjectDomain, n_days: int, n_periods: int, rules: RuleSet) -> Optional[str]:
    """Devuelve el motivo por el que la materia no se puede ubicar, o None."""
    if n_days <= 0 or n_periods <= 0:
        return f"Materia {dom.subject.name} ({dom.subject.id}) omitida: no hay periodos"
    if dom.subject.is_lab:
        if n_periods < LAB_PERIODS:
            return (
                f"Laboratorio {dom.subject.name} ({dom.subject.id}) omitido: "
                f"requiere {LAB_PERIODS} periodos seguidos"
            )
        return None
    if dom.subject.periods_per_week > 0 and not _has_free_slot(n_days, n_periods, rules):
        return (
            f"Materia {dom.subject.name} ({dom.subject.id}) omitida: "
            f"todos los periodos están restringidos"
        )
    return None


def random_assignments(
    dom: SubjectDomain,
    n_days: int,
    n_periods: int,
    rules: RuleSet,
    rng: random.Random,
) -> List[Assignment]:
    subj, teacher, room = dom.subject, dom.teacher, dom.room

    def make(day: int, period: int) -> Assignment:
        return Assignment(subj.id, teacher.id, room.id, day, period)

    # laboratorio: 2 periodos consecutivos el mismo día
    if subj.is_lab:
        day = rng.randrange(n_days)
        period = rng.randrange(n_periods - 1)
        return [make(day, period), make(day, period + 1)]

    # regular: un periodo por unidad de cuota, evitando los restringidos.
    # Los choques con otras materias los penaliza el fitness, no se evitan aquí.
    out: List[Assignment] = []
    while len(out) < subj.periods_per_week:
        day = rng.randrange(n_days)
        period = rng.randrange(n_periods)
        if rules.is_restricted(DAYS[day], period):
            continue
        out.append(make(day, period))
    return out


def random_schedule(
    domains: Sequence[SubjectDomain],
    n_days: int,
    n_periods: int,
    rules: RuleSet,
    rng: random.Random,
) -> Candidate:
    genes: List[Assignment] = []
    for dom in domains:
        if placeable(dom, n_days, n_periods, rules) is not None:
            continue
        genes.extend(random_assignments(dom, n_days, n_periods, rules, rng))
    return Candidate(schedule=tuple(genes))


def lab_pair_locks(
    domains: Sequence[SubjectDomain],
    n_days: int,
    n_periods: int,
    rules: RuleSet,
) -> FrozenSet[int]:
    """
    Posiciones del segundo periodo de cada laboratorio en el cromosoma.
    Todos los candidatos comparten la misma disposición de genes.
    """
    locks: Set[int] = set()
    pos = 0
    for dom in domains:
        if placeable(dom, n_days, n_periods, rules) is not None:
            continue
        if dom.subject.is_lab:
            locks.add(pos + 1)
            pos += LAB_PERIODS
        else:
            pos += max(0, dom.subject.periods_per_week)
    return frozenset(locks)


def build_initial_population(
    domains: Sequence[SubjectDomain],
    n_days: int,
    n_periods: int,
    rules: RuleSet,
    pop_size: int,
    rng: random.Random,
) -> List[Candidate]:
    return [random_schedule(domains, n_days, n_periods, rules, rng) for _ in range(pop_size)]
