"""Tests for k-subset enumeration."""

import pytest

from quorumsecret.crypto.combinations import KSubsets


def test_lexicographic_order():
    assert list(KSubsets([1, 2, 3, 4], 2)) == [
        (1, 2), (1, 3), (1, 4), (2, 3), (2, 4), (3, 4),
    ]


def test_follows_input_order():
    assert list(KSubsets([3, 1, 2], 2)) == [(3, 1), (3, 2), (1, 2)]


def test_k_equals_n_single_subset():
    subsets = KSubsets([5, 6, 7], 3)
    assert list(subsets) == [(5, 6, 7)]
    assert len(subsets) == 1


def test_k_one():
    assert list(KSubsets([1, 2, 3], 1)) == [(1,), (2,), (3,)]


def test_restartable():
    subsets = KSubsets(range(6), 3)
    first = list(subsets)
    assert list(subsets) == first
    assert len(first) == len(subsets) == 20
    assert len(set(first)) == 20


@pytest.mark.parametrize("k", [0, 4, -1])
def test_invalid_k(k):
    with pytest.raises(ValueError):
        KSubsets([1, 2, 3], k)
