"""Shared fixtures for the subset_selection test suite."""

import pytest

from subset_selection import (
    ConstantObjective,
    DistanceData,
    IdData,
    MeanDistanceObjective,
    SubsetProblem,
)
from subset_selection.random_utils import seed_random_generator


@pytest.fixture(autouse=True)
def seeded_rng():
    seed_random_generator(42)


@pytest.fixture
def id_data():
    return IdData(range(1, 11))


@pytest.fixture
def triangle_data():
    # pairwise distances 3, 4 and 5
    return DistanceData.from_coordinates([[0.0, 0.0], [3.0, 0.0], [0.0, 4.0]], ids=[10, 20, 30])


@pytest.fixture
def minimizing_objective():
    return ConstantObjective(5.0)


@pytest.fixture
def problem(id_data, minimizing_objective):
    return SubsetProblem(minimizing_objective, id_data, 2, 4)


@pytest.fixture
def distance_problem(triangle_data):
    return SubsetProblem(MeanDistanceObjective(), triangle_data, 1, 3)
