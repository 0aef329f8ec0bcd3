import pytest

from hexattach.common.iter import chunked, unique_everseen


def test_chunked_basic():
    data = list(range(10))
    chunks = list(chunked(data, 3))
    assert chunks == [[0, 1, 2], [3, 4, 5], [6, 7, 8], [9]]


def test_chunked_size_gt_len():
    assert list(chunked([1, 2, 3], 10)) == [[1, 2, 3]]


def test_chunked_empty_and_generator_input():
    assert list(chunked([], 3)) == []
    assert list(chunked((i * i for i in range(5)), 2)) == [[0, 1], [4, 9], [16]]


def test_chunked_rejects_non_positive_size():
    with pytest.raises(ValueError):
        list(chunked([1], 0))


def test_unique_everseen_keeps_first_order():
    assert unique_everseen(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]
