import inspect

from sqlbulk.batching.chunking import chunk_records, effective_chunk_size, rows_per_chunk

POSTGRES_MAX_PARAMETERS = 65_535
EVENT_COLUMNS = 7


def _flatten(chunks):
    return [item for chunk in chunks for item in chunk]


def test_chunks_partition_input_in_order():
    records = list(range(23))
    for size in (1, 2, 5, 7, 22):
        chunks = list(chunk_records(records, size))
        assert _flatten(chunks) == records
        assert sum(len(chunk) for chunk in chunks) == len(records)
        assert all(len(chunk) <= size for chunk in chunks)


def test_only_last_chunk_may_be_short():
    chunks = list(chunk_records(list(range(10)), 4))
    assert [len(chunk) for chunk in chunks] == [4, 4, 2]


def test_non_positive_chunk_size_yields_single_chunk():
    records = ["a", "b", "c"]
    assert list(chunk_records(records, 0)) == [records]
    assert list(chunk_records(records, -5)) == [records]


def test_chunk_size_at_least_input_length_yields_single_chunk():
    records = ["a", "b", "c"]
    assert list(chunk_records(records, 3)) == [records]
    assert list(chunk_records(records, 100)) == [records]


def test_empty_input_yields_no_chunks():
    assert list(chunk_records([], 10)) == []
    assert list(chunk_records([], 0)) == []


def test_chunking_is_lazy():
    assert inspect.isgenerator(chunk_records([1, 2, 3], 1))


def test_rows_per_chunk_fits_budget():
    rows = rows_per_chunk(POSTGRES_MAX_PARAMETERS, EVENT_COLUMNS)
    assert rows == 9362
    assert rows * EVENT_COLUMNS <= POSTGRES_MAX_PARAMETERS
    assert (rows + 1) * EVENT_COLUMNS > POSTGRES_MAX_PARAMETERS


def test_rows_per_chunk_never_below_one_row():
    assert rows_per_chunk(5, 10) == 1


def test_effective_chunk_size_takes_smaller_of_size_and_budget():
    assert effective_chunk_size(1000, 100, 7) == 14
    assert effective_chunk_size(5, 100, 7) == 5


def test_effective_chunk_size_without_budget_keeps_size():
    assert effective_chunk_size(50, None, 3) == 50
    assert effective_chunk_size(0, None, 3) == 0


def test_effective_chunk_size_budget_only():
    assert effective_chunk_size(0, 100, 10) == 10
