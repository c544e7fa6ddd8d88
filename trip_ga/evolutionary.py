import enum
import logging
import random
import warnings
from dataclasses import asdict, dataclass
from typing import Callable, Dict, List, Optional, Sequence

from .distances import DistanceTable, Location
from .evaluation import GenerationReport, distance_stats, rank
from .operators import MUTATION_STRENGTHS, swap_positions
from .population import Population, build_routes, fill_with_shuffles, initial_population
from .route import Route


logger = logging.getLogger(__name__)


class InvalidConfigurationError(ValueError):
    pass


class DegenerateInputWarning(UserWarning):
    pass


@dataclass
class EvolutionConfig:
    generations: int = 10000
    population_size: int = 1000
    # Survivors are the best population_size // survivor_divisor routes.
    survivor_divisor: int = 20
    random_seed: Optional[int] = 123
    report_interval: int = 100
    workers: int = 1
    anchor_last: bool = False

    @property
    def survivor_count(self) -> int:
        return self.population_size // self.survivor_divisor

    def validate(self) -> None:
        for name in ("generations", "population_size", "survivor_divisor", "workers"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise InvalidConfigurationError(f"{name} must be a positive integer, got {value!r}")
        if self.report_interval < 0:
            raise InvalidConfigurationError(
                f"report_interval must be zero or positive, got {self.report_interval!r}"
            )
        if self.survivor_count == 0:
            raise InvalidConfigurationError(
                f"survivor_divisor={self.survivor_divisor} selects no survivors "
                f"from population_size={self.population_size}"
            )


class EvolverState(enum.Enum):
    INITIALIZING = "initializing"
    EVALUATING = "evaluating"
    SELECTING = "selecting"
    REPRODUCING = "reproducing"
    TERMINATED = "terminated"


class EvolutionarySearch:
    def __init__(
        self,
        config: EvolutionConfig,
        destinations: Sequence[Location],
        table: DistanceTable,
        rng: random.Random = None,
        on_generation: Callable[[GenerationReport], None] = None,
    ):
        config.validate()
        self.cfg = config
        self.destinations: List[Location] = list(destinations)
        _check_destinations(self.destinations)
        table.require_complete(self.destinations)
        self.table = table
        self.rng = rng or random.Random(config.random_seed)
        self.on_generation = on_generation
        self.state = EvolverState.INITIALIZING
        self.generation = 0
        self.global_best: Optional[Route] = None
        self.stale_generations = 0
        self.population: Population = initial_population(
            self.destinations, table, self.rng, config.population_size, workers=config.workers
        )
        self.state = EvolverState.EVALUATING

    def evaluate(self) -> List[Route]:
        self._expect(EvolverState.EVALUATING)
        ranked = rank(self.population)
        best_this_gen = ranked[0]
        if self.global_best is None:
            self.global_best = best_this_gen
        elif best_this_gen.distance < self.global_best.distance:
            self.global_best = best_this_gen
            self.stale_generations = 0
        else:
            self.stale_generations += 1
        self.state = EvolverState.SELECTING
        return ranked

    def select(self, ranked: Sequence[Route]) -> List[Route]:
        self._expect(EvolverState.SELECTING)
        self.state = EvolverState.REPRODUCING
        return list(ranked[: self.cfg.survivor_count])

    def reproduce(self, best_this_gen: Route, survivors: Sequence[Route]) -> Population:
        self._expect(EvolverState.REPRODUCING)
        size = self.cfg.population_size
        quota = self.cfg.survivor_count
        anchor = self.cfg.anchor_last
        # Slot 0 is the global best itself; the rest are drawn as sequences
        # first so the random stream does not depend on the worker count.
        sequences = []
        while 1 + len(sequences) < quota:
            sequences.append(swap_positions(self.global_best.stops, self.rng, 1, anchor))
        while 1 + len(sequences) < 2 * quota:
            sequences.append(swap_positions(best_this_gen.stops, self.rng, 1, anchor))
        for survivor in survivors:
            for k in MUTATION_STRENGTHS:
                sequences.append(swap_positions(survivor.stops, self.rng, k, anchor))
        offspring = build_routes(sequences[: size - 1], self.table, workers=self.cfg.workers)
        return fill_with_shuffles(
            [self.global_best] + offspring,
            self.destinations,
            self.table,
            self.rng,
            size,
            workers=self.cfg.workers,
        )

    def step(self) -> GenerationReport:
        ranked = self.evaluate()
        best_this_gen = ranked[0]
        report = GenerationReport(
            generation=self.generation,
            best_distance=best_this_gen.distance,
            global_best_distance=self.global_best.distance,
            stale_generations=self.stale_generations,
            mean_distance=distance_stats(ranked)["mean"],
        )
        survivors = self.select(ranked)
        self.population = self.reproduce(best_this_gen, survivors)
        if self.cfg.report_interval and self.generation % self.cfg.report_interval == 0:
            logger.info(
                "Generation %d evolved a route %d long. The shortest so far is %d",
                self.generation,
                report.best_distance,
                report.global_best_distance,
            )
        if self.on_generation is not None:
            self.on_generation(report)
        self.generation += 1
        if self.generation >= self.cfg.generations:
            self.state = EvolverState.TERMINATED
        else:
            self.state = EvolverState.EVALUATING
        return report

    def run(self) -> Route:
        while self.state is not EvolverState.TERMINATED:
            self.step()
        logger.info(
            "All %d generations have executed. The shortest path found is %d",
            self.generation,
            self.global_best.distance,
        )
        return self.global_best

    def best(self) -> Optional[Route]:
        return self.global_best

    def to_state(self) -> Dict:
        return {
            "cfg": asdict(self.cfg),
            "generation": self.generation,
            "state": self.state.value,
            "best": self.global_best.to_state() if self.global_best is not None else None,
        }

    def _expect(self, state: EvolverState) -> None:
        if self.state is not state:
            raise RuntimeError(f"search is {self.state.value}, expected {state.value}")


def _check_destinations(destinations: List[Location]) -> None:
    seen = set()
    duplicates = []
    for loc in destinations:
        if loc in seen:
            duplicates.append(loc)
        seen.add(loc)
    if duplicates:
        raise ValueError(f"duplicate destinations: {duplicates!r}")
    if len(destinations) < 2:
        warnings.warn(
            f"{len(destinations)} destination(s): every route has zero legs",
            DegenerateInputWarning,
            stacklevel=3,
        )
