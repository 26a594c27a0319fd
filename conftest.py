import pyarrow as pa
import pyarrow.parquet as pq
import pytest


def write_parquet(path, table, row_group_size=None):
    pq.write_table(table, str(path), row_group_size=row_group_size)
    return str(path)


def people_table(n=6):
    return pa.table(
        {
            "id": pa.array(list(range(n)), type=pa.int64()),
            "name": pa.array([f"name-{i}" for i in range(n)], type=pa.string()),
        }
    )


@pytest.fixture
def people_file(tmp_path):
    return write_parquet(tmp_path / "people.parquet", people_table(), row_group_size=2)


@pytest.fixture
def empty_file(tmp_path):
    table = pa.table(
        {
            "id": pa.array([], type=pa.int64()),
            "name": pa.array([], type=pa.string()),
        }
    )
    return write_parquet(tmp_path / "empty.parquet", table)


@pytest.fixture
def nullable_file(tmp_path):
    table = pa.table(
        {
            "id": pa.array([0, 1, 2], type=pa.int64()),
            "note": pa.array(["a", None, ""], type=pa.string()),
        }
    )
    return write_parquet(tmp_path / "nullable.parquet", table)


@pytest.fixture
def far_date_file(tmp_path):
    # the last day date32 can hold is far past what datetime.date accepts
    table = pa.table(
        {
            "id": pa.array([0, 1], type=pa.int64()),
            "day": pa.array([0, 2**31 - 1], type=pa.date32()),
        }
    )
    return write_parquet(tmp_path / "far_date.parquet", table)
