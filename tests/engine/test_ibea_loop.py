import logging

import numpy as np
import pytest

from ibeakit import IBEA, IBEAConfig
from ibeakit.foundation.exceptions import ConfigurationError, MissingConfigError, OperatorFailure
from ibeakit.foundation.metrics.pareto import dominance_compare
from ibeakit.foundation.problem import BinhKornProblem, DTLZ2Problem, ZDT1Problem
from ibeakit.foundation.solution import Solution, SolutionSet


class LineProblem:
    n_var = 2
    n_obj = 2
    n_constraints = 0

    def __init__(self, fail_at: int | None = None) -> None:
        self.evaluations = 0
        self.fail_at = fail_at

    def create_solution(self, rng: np.random.Generator) -> Solution:
        solution = Solution.empty(self.n_var, self.n_obj)
        solution.variables = rng.random(self.n_var)
        return solution

    def evaluate(self, solution: Solution) -> None:
        self.evaluations += 1
        if self.fail_at is not None and self.evaluations == self.fail_at:
            raise ZeroDivisionError("boom")
        x = solution.variables
        solution.objectives = np.array([x[0], 1.0 - x[0] + x[1]])

    def evaluate_constraints(self, solution: Solution) -> None:
        return None


class CyclingSelection:
    def __init__(self) -> None:
        self.calls = 0

    def execute(self, solutions):
        self.calls += 1
        return solutions[self.calls % len(solutions)]


class MidpointCrossover:
    def __init__(self, fail: bool = False) -> None:
        self.calls = 0
        self.fail = fail

    def execute(self, parents):
        self.calls += 1
        if self.fail:
            raise RuntimeError("crossover exploded")
        first = parents[0].copy()
        first.variables = 0.5 * (parents[0].variables + parents[1].variables)
        return [first, parents[1].copy()]


class ShrinkMutation:
    def __init__(self) -> None:
        self.mutated = []

    def execute(self, solution):
        self.mutated.append(solution)
        solution.variables = np.clip(0.9 * solution.variables + 0.01, 0.0, 1.0)


def _stub_operators():
    return {"selection": CyclingSelection(), "crossover": MidpointCrossover(), "mutation": ShrinkMutation()}


def _config(pop_size: int = 10, budget: int = 200, **kwargs) -> dict:
    return {"pop_size": pop_size, "archive_size": pop_size, "max_evaluations": budget, **kwargs}


def _assert_non_dominated(F: np.ndarray) -> None:
    for i in range(F.shape[0]):
        for j in range(F.shape[0]):
            if i != j:
                assert dominance_compare(F[i], F[j]) != -1


def test_run_spends_budget_in_whole_generations() -> None:
    problem = LineProblem()
    result = IBEA(_config(), **_stub_operators()).run(problem, seed=3)

    assert result["n_eval"] == 200
    assert result["evaluations"] == 200
    assert result["generation"] == 19
    assert problem.evaluations == 200
    assert len(result["archive"]) == 10


def test_budget_overshoots_to_full_generation() -> None:
    result = IBEA(_config(budget=25), **_stub_operators()).run(LineProblem(), seed=3)
    assert result["n_eval"] == 30
    assert result["generation"] == 2


def test_run_is_deterministic_with_stub_operators() -> None:
    first = IBEA(_config(), **_stub_operators()).run(LineProblem(), seed=5)
    second = IBEA(_config(), **_stub_operators()).run(LineProblem(), seed=5)

    assert first["F"].tobytes() == second["F"].tobytes()
    assert first["X"].tobytes() == second["X"].tobytes()
    assert first["archive"].fitness_values().tobytes() == second["archive"].fitness_values().tobytes()


def test_run_is_deterministic_with_seeded_default_operators() -> None:
    cfg = IBEAConfig.default(pop_size=12)
    first = IBEA(cfg).run(ZDT1Problem(n_var=6), ("max_evaluations", 240), seed=11)
    second = IBEA(cfg).run(ZDT1Problem(n_var=6), ("max_evaluations", 240), seed=11)
    assert np.array_equal(first["F"], second["F"])
    assert np.array_equal(first["X"], second["X"])


def test_config_seed_drives_the_run() -> None:
    problem = ZDT1Problem(n_var=6)
    first = IBEA(_config(pop_size=8, budget=40, seed=1)).run(problem)
    second = IBEA(_config(pop_size=8, budget=40, seed=2)).run(problem)
    assert not np.array_equal(first["F"], second["F"])

    again = IBEA(_config(pop_size=8, budget=40, seed=1)).run(problem)
    assert np.array_equal(first["F"], again["F"])


def test_explicit_seed_overrides_config_seed() -> None:
    problem = ZDT1Problem(n_var=6)
    from_config = IBEA(_config(pop_size=8, budget=40, seed=5)).run(problem)
    explicit = IBEA(_config(pop_size=8, budget=40)).run(problem, seed=5)
    overridden = IBEA(_config(pop_size=8, budget=40, seed=9)).run(problem, seed=5)
    assert np.array_equal(from_config["F"], explicit["F"])
    assert np.array_equal(from_config["F"], overridden["F"])


def test_only_first_child_is_mutated_and_kept() -> None:
    ops = _stub_operators()
    result = IBEA(_config(budget=40), **ops).run(LineProblem(), seed=0)

    assert result["generation"] == 3
    assert ops["crossover"].calls == 30
    assert len(ops["mutation"].mutated) == 30
    # One selection call per parent, two parents per child.
    assert ops["selection"].calls == 60


def test_tournament_rounds_repeat_selection() -> None:
    ops = _stub_operators()
    IBEA(_config(budget=20, tournament_rounds=3), **ops).run(LineProblem(), seed=0)
    assert ops["selection"].calls == 10 * 2 * 3


@pytest.mark.smoke
def test_zdt1_front_is_non_dominated_and_within_bounds() -> None:
    problem = ZDT1Problem(n_var=10)
    cfg = IBEAConfig.builder().pop_size(20).archive_size(20).max_evaluations(600).build()

    result = IBEA(cfg).run(problem, seed=1)

    assert len(result["archive"]) == 20
    assert result["F"].shape[1] == 2
    assert 0 < result["F"].shape[0] <= 20
    _assert_non_dominated(result["F"])
    assert np.all(result["X"] >= 0.0)
    assert np.all(result["X"] <= 1.0)
    assert result["G"] is None


def test_dtlz2_three_objectives() -> None:
    cfg = IBEAConfig.default(pop_size=12)
    result = IBEA(cfg).run(DTLZ2Problem(n_var=7, n_obj=3), ("max_evaluations", 120), seed=2)
    assert result["F"].shape[1] == 3
    _assert_non_dominated(result["F"])


def test_constrained_problem_reports_constraints() -> None:
    cfg = IBEAConfig.default(pop_size=16)
    result = IBEA(cfg).run(BinhKornProblem(), ("n_eval", 320), seed=4)

    G = result["G"]
    assert G is not None
    assert G.shape == (result["F"].shape[0], 2)
    lower, upper = BinhKornProblem().bounds()
    assert np.all(result["X"] >= lower)
    assert np.all(result["X"] <= upper)


def test_invalid_config_fails_before_any_evaluation() -> None:
    problem = LineProblem()
    with pytest.raises(ConfigurationError):
        IBEA(_config(pop_size=0), **_stub_operators()).run(problem)
    assert problem.evaluations == 0

    with pytest.raises(ConfigurationError):
        IBEA(_config(kappa=-1.0), **_stub_operators()).run(problem)
    assert problem.evaluations == 0


def test_invalid_termination_fails_before_any_evaluation() -> None:
    problem = LineProblem()
    with pytest.raises(ConfigurationError):
        IBEA(_config(), **_stub_operators()).run(problem, ("wall_time", 10))
    with pytest.raises(ConfigurationError):
        IBEA(_config(), **_stub_operators()).run(problem, ("max_evaluations", 0))
    assert problem.evaluations == 0


def test_missing_budget_raises_missing_config() -> None:
    with pytest.raises(MissingConfigError):
        IBEA({"pop_size": 10, "archive_size": 10}, **_stub_operators()).run(LineProblem())


def test_unsupported_config_type_raises() -> None:
    with pytest.raises(ConfigurationError):
        IBEA([("pop_size", 10)], **_stub_operators()).run(LineProblem())


def test_evaluation_failure_is_wrapped() -> None:
    with pytest.raises(OperatorFailure) as info:
        IBEA(_config(), **_stub_operators()).run(LineProblem(fail_at=15), seed=0)
    assert info.value.stage == "evaluate"
    assert isinstance(info.value.__cause__, ZeroDivisionError)
    assert info.value.details["evaluations"] == 14


def test_crossover_failure_is_wrapped() -> None:
    ops = _stub_operators()
    ops["crossover"] = MidpointCrossover(fail=True)
    with pytest.raises(OperatorFailure) as info:
        IBEA(_config(), **ops).run(LineProblem(), seed=0)
    assert info.value.stage == "crossover"
    assert isinstance(info.value.__cause__, RuntimeError)


def test_ask_tell_matches_run() -> None:
    cfg = IBEAConfig.default(pop_size=10)
    termination = ("max_evaluations", 100)
    expected = IBEA(cfg).run(ZDT1Problem(n_var=5), termination, seed=9)

    problem = ZDT1Problem(n_var=5)
    ibea = IBEA(cfg)
    ibea.initialize(problem, termination, seed=9)
    while not ibea.should_terminate():
        offspring = ibea.ask()
        for child in offspring:
            problem.evaluate(child)
        ibea.tell(offspring)
    result = ibea.result()

    assert result["n_eval"] == expected["n_eval"]
    assert result["generation"] == expected["generation"]
    assert np.array_equal(result["F"], expected["F"])


def test_ask_tell_misuse() -> None:
    ibea = IBEA(_config(), **_stub_operators())
    assert ibea.should_terminate()
    with pytest.raises(RuntimeError):
        ibea.ask()

    ibea.initialize(LineProblem(), seed=0)
    with pytest.raises(RuntimeError):
        ibea.tell(SolutionSet())

    offspring = ibea.ask()
    assert len(offspring) == 10
    with pytest.raises(RuntimeError):
        ibea.ask()
    with pytest.raises(ValueError):
        ibea.tell(offspring[:3])


def test_budget_spent_by_initial_population() -> None:
    result = IBEA(_config(budget=10), **_stub_operators()).run(LineProblem(), seed=0)
    assert result["generation"] == 0
    assert result["n_eval"] == 10
    assert len(result["archive"]) == 10
    _assert_non_dominated(result["F"])


def test_result_forms_archive_when_no_generation_ran() -> None:
    ibea = IBEA(_config(budget=10), **_stub_operators())
    ibea.initialize(LineProblem(), seed=0)
    assert ibea.should_terminate()
    assert len(ibea.state.archive) == 0
    assert np.all(ibea.state.population.fitness_values() == 0.0)

    result = ibea.result()

    assert len(ibea.state.archive) == 10
    assert np.all(ibea.state.archive.fitness_values() > 0.0)
    assert ibea.state.generation == 0
    assert len(result["archive"]) == 10


def test_custom_ranking_is_used() -> None:
    def first_two(solutions):
        return [SolutionSet(solutions[:2]), SolutionSet(solutions[2:])]

    result = IBEA(_config(budget=30), ranking=first_two, **_stub_operators()).run(LineProblem(), seed=0)
    assert len(result["solutions"]) == 2
    assert result["F"].shape == (2, 2)


def test_generation_progress_is_logged(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="ibeakit")
    IBEA(_config(budget=30), **_stub_operators()).run(LineProblem(), seed=0)
    messages = [r.getMessage() for r in caplog.records if r.levelno == logging.DEBUG]
    assert any(m.startswith("Generation 0:") for m in messages)
    assert any(m.startswith("Generation 1:") for m in messages)
