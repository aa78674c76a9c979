import logging
import random
import time
from typing import Optional, Sequence

from .config import SearchConfig
from .decoder import decode_timetable, empty_grid
from .domains import resolve_domains
from .evaluation import EvaluationContext, evaluate
from .ga import GeneticSolver
from .initial_population import placeable
from .model import Classroom, OutputTimetable, RuleSet, Subject, Teacher, TimingConfig, day_names
from .periods import build_periods

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data provided. Please add teachers, subjects, and classrooms."
NO_PERIODS_MESSAGE = "No periods fit within the configured timing."


def generate_timetable(
    teachers: Sequence[Teacher],
    subjects: Sequence[Subject],
    rooms: Sequence[Classroom],
    timing: TimingConfig,
    working_days: int,
    rules: RuleSet,
    config: Optional[SearchConfig] = None,
    rng: Optional[random.Random] = None,
) -> OutputTimetable:
    cfg = config or SearchConfig()
    days = day_names(working_days)
    periods = build_periods(timing)

    if not subjects or not teachers or not rooms:
        logger.info("Datos insuficientes: no se ejecuta la búsqueda")
        return OutputTimetable(days=days, periods=periods, grid={}, conflicts=[NO_DATA_MESSAGE])

    if not periods:
        logger.warning("El horario %s-%s no admite ningún periodo", timing.start_time, timing.end_time)
        return OutputTimetable(
            days=days, periods=[], grid=empty_grid(days, 0, timing), conflicts=[NO_PERIODS_MESSAGE]
        )

    if rng is None:
        rng = random.Random(cfg.seed)

    resolution = resolve_domains(subjects, teachers, rooms, cfg.strict_lab_rooms)
    for dom in resolution.domains:
        reason = placeable(dom, len(days), len(periods), rules)
        if reason is not None:
            resolution.warn(reason)

    ctx = EvaluationContext.build(teachers, subjects, rooms)
    solver = GeneticSolver(ctx, resolution.domains, len(days), len(periods), rules, cfg, rng)

    logger.info(
        "Generaciones: %d | Población: %d | Materias: %d",
        cfg.generations, cfg.population_size, len(resolution.domains),
    )
    start = time.perf_counter()
    best = solver.evolve(solver.initial_population())
    elapsed = time.perf_counter() - start

    final = evaluate(best.schedule, ctx, rules, cfg.extended_rules)
    logger.info(
        "Mejor fitness=%.2f | conflictos=%d | generaciones=%d | %.2fs",
        final.fitness, len(final.conflicts), len(solver.history), elapsed,
    )

    tt = decode_timetable(best, days, periods, timing, subjects, teachers, rooms, final.conflicts)
    tt.fitness = final.fitness
    tt.warnings = list(resolution.warnings)
    tt.violations = list(final.violations)
    tt.generations = len(solver.history)
    tt.history = list(solver.history)
    return tt
