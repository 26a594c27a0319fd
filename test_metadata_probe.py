import pyarrow.parquet as pq
import pytest

from conftest import people_table, write_parquet
from errors import MetadataFailure, OpenFailure
from metadata_probe import probe
from source_handle import SourceHandle


def test_probe_reports_counts_and_names(people_file):
    meta = probe(SourceHandle(people_file))
    assert meta.row_count == 6
    assert meta.column_count == 2
    assert meta.column_names == ("id", "name")
    assert meta.row_group_rows == (2, 2, 2)


@pytest.mark.parametrize("rows, group_size", [(1, None), (10, 3), (257, 64)])
def test_probe_counts_match_full_scan(tmp_path, rows, group_size):
    path = write_parquet(tmp_path / "t.parquet", people_table(rows), row_group_size=group_size)
    meta = probe(SourceHandle(path))
    full = pq.read_table(path)
    assert meta.row_count == full.num_rows
    assert meta.column_count == full.num_columns
    assert sum(meta.row_group_rows) == full.num_rows


def test_probe_empty_file_is_not_an_error(empty_file):
    meta = probe(SourceHandle(empty_file))
    assert meta.row_count == 0
    assert meta.column_count == 2
    assert isinstance(meta.column_names, tuple)


def test_probe_reads_only_first_batch(people_file, monkeypatch):
    calls = []
    original = pq.ParquetFile.iter_batches

    def spy(self, *args, **kwargs):
        calls.append(kwargs)
        return original(self, *args, **kwargs)

    monkeypatch.setattr(pq.ParquetFile, "iter_batches", spy)
    probe(SourceHandle(people_file))
    assert calls == [{"batch_size": 1}]


def test_probe_names_survive_empty_first_row_group(tmp_path):
    path = str(tmp_path / "late.parquet")
    table = people_table(3)
    with pq.ParquetWriter(path, table.schema) as writer:
        writer.write_table(table.slice(0, 0))
        writer.write_table(table)
    meta = probe(SourceHandle(path))
    assert meta.row_group_rows[0] == 0
    assert meta.row_count == 3
    assert meta.column_names == ("id", "name")


def test_missing_file_is_open_failure(tmp_path):
    with pytest.raises(OpenFailure):
        probe(SourceHandle(tmp_path / "missing.parquet"))


def test_directory_is_open_failure(tmp_path):
    folder = tmp_path / "dir.parquet"
    folder.mkdir()
    with pytest.raises(OpenFailure):
        probe(SourceHandle(folder))


def test_unsupported_extension_is_open_failure(tmp_path):
    with pytest.raises(OpenFailure):
        SourceHandle(tmp_path / "data.csv")


def test_corrupt_file_is_metadata_failure(tmp_path):
    path = tmp_path / "corrupt.parquet"
    path.write_bytes(b"this is not parquet at all")
    with pytest.raises(MetadataFailure):
        probe(SourceHandle(path))
