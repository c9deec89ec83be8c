"""Tests for problems: solution generation, rejection, evaluation and size bounds."""

import threading
from collections import Counter

import pytest

from subset_selection import (
    Constraint,
    ConstantObjective,
    IdData,
    MinimumDistanceConstraint,
    PenalizedEvaluation,
    SimpleValidation,
    SubsetProblem,
    SubsetProblemSettings,
    SubsetSolution,
    SubsetValidation,
)
from subset_selection.random_utils import get_random_generator, random_subset, seed_random_generator


class ForbiddenIdConstraint(Constraint):
    def __init__(self, forbidden):
        self.forbidden = forbidden

    def validate(self, solution, data):
        return SimpleValidation(not solution.is_selected(self.forbidden))


class TestConstruction:
    def test_valid(self, problem):
        assert problem.get_min_subset_size() == 2
        assert problem.get_max_subset_size() == 4
        assert problem.is_minimizing()

    def test_fixed_size(self, id_data, minimizing_objective):
        p = SubsetProblem(minimizing_objective, id_data, 3)
        assert p.get_min_subset_size() == p.get_max_subset_size() == 3

    def test_min_larger_than_max(self, id_data, minimizing_objective):
        with pytest.raises(ValueError, match="minimum"):
            SubsetProblem(minimizing_objective, id_data, 3, 2)

    def test_max_larger_than_universe(self, id_data, minimizing_objective):
        with pytest.raises(ValueError, match="maximum"):
            SubsetProblem(minimizing_objective, id_data, 1, 11)

    def test_negative_min(self, id_data, minimizing_objective):
        with pytest.raises(ValueError, match="minimum"):
            SubsetProblem(minimizing_objective, id_data, -1, 2)

    def test_zero_min_allowed(self, id_data, minimizing_objective):
        assert SubsetProblem(minimizing_objective, id_data, 0, 2).get_min_subset_size() == 0

    def test_missing_objective(self, id_data):
        with pytest.raises(ValueError, match="objective"):
            SubsetProblem(None, id_data, 1, 2)

    def test_missing_data(self, minimizing_objective):
        with pytest.raises(ValueError, match="data"):
            SubsetProblem(minimizing_objective, None, 1, 2)

    def test_from_settings(self, id_data, minimizing_objective):
        settings = SubsetProblemSettings(min_subset_size=2, max_subset_size=5, sorted_ids=True)
        p = SubsetProblem.from_settings(minimizing_objective, id_data, settings)
        assert p.get_max_subset_size() == 5
        assert p.sorted_ids

    def test_invalid_settings(self):
        with pytest.raises(ValueError):
            SubsetProblemSettings(min_subset_size=3, max_subset_size=1)
        with pytest.raises(ValueError):
            SubsetProblemSettings(min_subset_size=-1)


class TestSolutionGeneration:
    def test_random_sizes_within_bounds_and_all_occur(self, problem):
        sizes = set()
        for _ in range(300):
            sol = problem.create_random_solution()
            assert 2 <= sol.get_num_selected_ids() <= 4
            assert sol.all_ids.as_frozenset() == frozenset(range(1, 11))
            sizes.add(sol.get_num_selected_ids())
        assert sizes == {2, 3, 4}

    def test_random_selection_covers_universe(self, problem):
        seen = set()
        for _ in range(200):
            seen |= problem.create_random_solution().selected_ids.as_frozenset()
        assert seen == frozenset(range(1, 11))

    def test_random_full_universe(self, id_data, minimizing_objective):
        p = SubsetProblem(minimizing_objective, id_data, 10)
        assert p.create_random_solution().get_num_selected_ids() == 10

    def test_random_sorted(self, id_data, minimizing_objective):
        p = SubsetProblem(minimizing_objective, id_data, 5, sorted_ids=True)
        selected = list(p.create_random_solution().selected_ids)
        assert selected == sorted(selected)

    def test_empty(self, problem):
        sol = problem.create_empty_solution()
        assert sol.get_num_selected_ids() == 0
        assert sol.unselected_ids.as_frozenset() == frozenset(range(1, 11))

    def test_set_data_changes_universe(self, problem):
        problem.set_data(IdData(range(100, 110)))
        assert problem.create_empty_solution().all_ids.as_frozenset() == frozenset(range(100, 110))
        assert problem.create_random_solution().selected_ids.as_frozenset() <= frozenset(range(100, 110))

    def test_set_data_none(self, problem):
        with pytest.raises(ValueError):
            problem.set_data(None)

    def test_concurrent_generation(self, problem):
        results = []
        generators = []
        lock = threading.Lock()

        def work():
            rng = get_random_generator()
            sols = [problem.create_random_solution() for _ in range(50)]
            with lock:
                generators.append(rng)
                results.extend(sols)

        threads = [threading.Thread(target=work) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 200
        assert all(2 <= s.get_num_selected_ids() <= 4 for s in results)
        assert len({id(g) for g in generators}) == 4

    def test_random_subsets_uniform(self, minimizing_objective):
        p = SubsetProblem(minimizing_objective, IdData(range(5)), 2)
        draws = 10_000
        counts = Counter(p.create_random_solution().selected_ids.as_frozenset() for _ in range(draws))
        assert len(counts) == 10
        for count in counts.values():
            assert abs(count - draws / 10) < 200

    def test_concurrent_streams_differ(self, problem):
        streams = []
        lock = threading.Lock()

        def work():
            draws = [tuple(sorted(problem.create_random_solution().selected_ids)) for _ in range(20)]
            with lock:
                streams.append(draws)

        threads = [threading.Thread(target=work) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(streams) == 4
        for i in range(4):
            for j in range(i + 1, 4):
                assert streams[i] != streams[j]

    def test_thread_draws_do_not_touch_caller_stream(self, problem):
        thread_draws = []

        def work():
            seed_random_generator(7)
            thread_draws.extend(problem.create_random_solution().selected_ids.as_frozenset() for _ in range(10))

        seed_random_generator(7)
        t = threading.Thread(target=work)
        t.start()
        t.join()
        own_draws = [problem.create_random_solution().selected_ids.as_frozenset() for _ in range(10)]
        assert own_draws == thread_draws


class TestRandomSubset:
    def test_size(self):
        subset = random_subset(range(10), 4, get_random_generator())
        assert len(set(subset)) == 4
        assert set(subset) <= set(range(10))

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            random_subset(range(3), 4, get_random_generator())
        with pytest.raises(ValueError):
            random_subset(range(3), -1, get_random_generator())

    def test_ids_beyond_int64(self):
        big = [2 ** 70 + i for i in range(5)]
        subset = random_subset(big, 3, get_random_generator())
        assert len(set(subset)) == 3
        assert set(subset) <= set(big)


class TestRejection:
    def test_size_checked(self, problem):
        too_small = SubsetSolution(range(1, 11), selected_ids=[1])
        too_large = SubsetSolution(range(1, 11), selected_ids=[1, 2, 3, 4, 5])
        ok = SubsetSolution(range(1, 11), selected_ids=[1, 2, 3])
        assert problem.reject_solution(too_small)
        assert problem.reject_solution(too_large)
        assert not problem.reject_solution(ok)

    def test_size_ignored(self, problem):
        too_small = SubsetSolution(range(1, 11), selected_ids=[1])
        assert not problem.reject_solution(too_small, check_subset_size=False)

    def test_rejecting_constraint(self, problem):
        problem.add_rejecting_constraint(ForbiddenIdConstraint(3))
        with_forbidden = SubsetSolution(range(1, 11), selected_ids=[1, 3])
        without = SubsetSolution(range(1, 11), selected_ids=[1, 2])
        assert problem.reject_solution(with_forbidden)
        assert problem.reject_solution(with_forbidden, check_subset_size=False)
        assert not problem.reject_solution(without)

    def test_remove_rejecting_constraint(self, problem):
        constraint = ForbiddenIdConstraint(3)
        problem.add_rejecting_constraint(constraint)
        assert problem.remove_rejecting_constraint(constraint)
        assert not problem.remove_rejecting_constraint(constraint)
        assert not problem.reject_solution(SubsetSolution(range(1, 11), selected_ids=[1, 3]))

    def test_validate(self, problem):
        problem.add_rejecting_constraint(ForbiddenIdConstraint(3))
        validation = problem.validate(SubsetSolution(range(1, 11), selected_ids=[3]))
        assert isinstance(validation, SubsetValidation)
        assert not validation.valid_size()
        assert not validation.passed_ignoring_size()


class TestEvaluation:
    def test_without_penalizing_constraints(self, problem):
        evaluation = problem.evaluate(problem.create_random_solution())
        assert not isinstance(evaluation, PenalizedEvaluation)
        assert evaluation.get_value() == 5.0

    def test_penalizing_constraint_minimizing(self, triangle_data):
        p = SubsetProblem(ConstantObjective(5.0), triangle_data, 1, 3)
        constraint = MinimumDistanceConstraint(3.5, penalty_per_violation=1.5)
        p.add_penalizing_constraint(constraint)
        sol = SubsetSolution(triangle_data.get_ids(), selected_ids=[10, 20, 30])
        evaluation = p.evaluate(sol)
        assert isinstance(evaluation, PenalizedEvaluation)
        assert evaluation.get_value() == 6.5
        assert str(evaluation) == "6.5 (unpenalized: 5.0)"
        assert not evaluation.get_penalizing_validation(constraint).passed()
        assert not p.validate(sol).passed()

    def test_penalizing_constraint_maximizing(self, distance_problem, triangle_data):
        distance_problem.add_penalizing_constraint(MinimumDistanceConstraint(3.5, penalty_per_violation=1.0))
        sol = SubsetSolution(triangle_data.get_ids(), selected_ids=[10, 20, 30])
        assert distance_problem.evaluate(sol).get_value() == pytest.approx(3.0)

    def test_penalizing_constraint_does_not_reject(self, distance_problem, triangle_data):
        distance_problem.add_penalizing_constraint(MinimumDistanceConstraint(3.5, penalty_per_violation=1.0))
        sol = SubsetSolution(triangle_data.get_ids(), selected_ids=[10, 20, 30])
        assert not distance_problem.reject_solution(sol)

    def test_rejecting_only_constraint(self, distance_problem, triangle_data):
        constraint = MinimumDistanceConstraint(3.5)
        with pytest.raises(ValueError):
            distance_problem.add_penalizing_constraint(constraint)
        distance_problem.add_rejecting_constraint(constraint)
        assert distance_problem.reject_solution(SubsetSolution(triangle_data.get_ids(), selected_ids=[10, 20]))
        assert not distance_problem.reject_solution(SubsetSolution(triangle_data.get_ids(), selected_ids=[20, 30]))


class TestSizeSetters:
    def test_set_min(self, problem):
        problem.set_min_subset_size(3)
        assert problem.get_min_subset_size() == 3

    def test_set_min_zero_rejected(self, problem):
        with pytest.raises(ValueError):
            problem.set_min_subset_size(0)
        assert problem.get_min_subset_size() == 2

    def test_set_min_above_max(self, problem):
        with pytest.raises(ValueError):
            problem.set_min_subset_size(5)
        assert problem.get_min_subset_size() == 2

    def test_set_max(self, problem):
        problem.set_max_subset_size(10)
        assert problem.get_max_subset_size() == 10

    def test_set_max_below_min(self, problem):
        with pytest.raises(ValueError):
            problem.set_max_subset_size(1)
        assert problem.get_max_subset_size() == 4

    def test_set_max_above_universe(self, problem):
        with pytest.raises(ValueError):
            problem.set_max_subset_size(11)
        assert problem.get_max_subset_size() == 4
