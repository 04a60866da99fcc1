import itertools

import pytest
from hypothesis import given, strategies as st

from quorum_gate.errors import InsufficientShares, NonInvertible
from quorum_gate.shamir import Share, evaluate_polynomial, reconstruct, split_secret

PRIME = 2089


def test_reference_shares_recover_secret():
    assert reconstruct([(1, 25), (2, 57), (3, 107)], PRIME) == 11


@given(
    st.integers(min_value=0, max_value=PRIME - 1),
    st.integers(min_value=1, max_value=PRIME - 1),
    st.integers(min_value=1, max_value=PRIME - 1),
)
def test_reconstruct_secret_success(secret, c1, c2):
    points = [(x, (secret + c1 * x + c2 * x * x) % PRIME) for x in (1, 2, 3)]
    assert reconstruct(points, PRIME) == secret


def test_reconstruct_independent_of_order():
    points = [(1, 25), (2, 57), (3, 107)]
    for perm in itertools.permutations(points):
        assert reconstruct(perm, PRIME) == 11


def test_any_threshold_subset_recovers_secret():
    shares = split_secret(11, [5, 9], range(1, 6), PRIME)
    for subset in itertools.combinations(shares, 3):
        assert reconstruct(subset, PRIME) == 11


def test_reconstruct_secret_failure():
    shares = split_secret(11, [5, 9], range(1, 6), PRIME)
    assert reconstruct(shares[:2], PRIME) != 11


@pytest.mark.parametrize("y2", [0, 25, 1000])
def test_duplicate_points_are_rejected(y2):
    with pytest.raises(NonInvertible):
        reconstruct([(4, 25), (4, y2)], PRIME)


def test_points_equal_modulo_prime_are_duplicates():
    with pytest.raises(NonInvertible):
        reconstruct([(1, 25), (1 + PRIME, 57), (3, 107)], PRIME)


def test_empty_point_set():
    with pytest.raises(InsufficientShares):
        reconstruct([], PRIME)


def test_edge_cases():
    assert reconstruct([Share(7, 77)], PRIME) == 77
    assert split_secret(88, [], [1, 2], PRIME) == [Share(1, 88), Share(2, 88)]
    assert evaluate_polynomial(11, [5, 9], 3, PRIME) == 107
    with pytest.raises(ValueError):
        split_secret(PRIME, [1], [1])
