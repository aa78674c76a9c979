import enum
import logging
import random
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Sequence

from .config import SearchConfig
from .domains import SubjectDomain
from .evaluation import EvaluationContext, score
from .initial_population import build_initial_population, lab_pair_locks
from .model import Candidate, RuleSet
from .operators import mutate, single_point_crossover, tournament_select

logger = logging.getLogger(__name__)


class SolverState(enum.Enum):
    INITIALIZED = "initialized"
    EVOLVING = "evolving"
    TERMINATED = "terminated"


class GeneticSolver:
    def __init__(
        self,
        ctx: EvaluationContext,
        domains: Sequence[SubjectDomain],
        n_days: int,
        n_periods: int,
        rules: RuleSet,
        cfg: SearchConfig,
        rng: random.Random,
    ):
        self.ctx = ctx
        self.domains = list(domains)
        self.n_days = n_days
        self.n_periods = n_periods
        self.rules = rules
        self.cfg = cfg
        self.rng = rng
        self.state = SolverState.INITIALIZED
        self.history: List[Dict] = []
        self.locks = lab_pair_locks(self.domains, n_days, n_periods, rules)

    def initial_population(self) -> List[Candidate]:
        return build_initial_population(
            self.domains, self.n_days, self.n_periods, self.rules, self.cfg.population_size, self.rng
        )

    def score_all(self, population: Sequence[Candidate]) -> List[Candidate]:
        def _score(cand: Candidate) -> Candidate:
            # candidatos ya evaluados (p. ej. una población sembrada) se conservan
            if cand.scored:
                return cand
            return score(cand, self.ctx, self.rules, self.cfg.extended_rules)

        if self.cfg.workers > 1 and len(population) > 1:
            # el fitness es puro: el orden y el resultado no dependen de los hilos
            with ThreadPoolExecutor(max_workers=self.cfg.workers) as executor:
                return list(executor.map(_score, population))
        return [_score(c) for c in population]

    def breed(self, population: Sequence[Candidate]) -> Candidate:
        p1 = tournament_select(population, self.rng, self.cfg.tournament_size)
        p2 = tournament_select(population, self.rng, self.cfg.tournament_size)
        child = single_point_crossover(p1, p2, self.rng, self.locks)
        return mutate(child, self.n_days, self.n_periods, self.cfg.mutation_rate, self.rng, self.locks)

    def evolve(self, population: Sequence[Candidate]) -> Candidate:
        if not population:
            raise ValueError("La población inicial está vacía")
        population = self.score_all(population)
        self.state = SolverState.EVOLVING

        for gen in range(self.cfg.generations):
            population.sort(key=lambda x: x.fitness, reverse=True)
            best = population[0]
            avg = sum(c.fitness for c in population) / len(population)
            self.history.append({"gen": gen, "best_fitness": best.fitness, "avg_fitness": avg})
            logger.debug("Gen %d: mejor fitness=%.2f promedio=%.2f", gen, best.fitness, avg)

            if best.fitness >= self.cfg.target_fitness:
                logger.info("Fitness objetivo alcanzado en la generación %d", gen)
                break

            # Elitismo
            new_pop: List[Candidate] = list(population[: min(self.cfg.elite_size, len(population))])
            # los hijos se generan en serie para que la semilla defina la corrida
            children = [self.breed(population) for _ in range(self.cfg.population_size - len(new_pop))]
            new_pop.extend(self.score_all(children))
            population = new_pop

        population.sort(key=lambda x: x.fitness, reverse=True)
        self.state = SolverState.TERMINATED
        return population[0]
