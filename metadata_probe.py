import logging
from dataclasses import dataclass

import pyarrow as pa

from errors import MetadataFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileMetadata:
    row_count: int
    column_count: int
    column_names: tuple[str, ...]
    row_group_rows: tuple[int, ...] = ()


def probe(source) -> FileMetadata:
    """Read row/column counts and column names without touching row data.

    Column names come from the schema of the first batch the reader yields
    (one row at most), skipping empty row groups. A file without row groups
    has no names.
    """
    pf = source.open()
    try:
        meta = pf.metadata
        row_count = int(meta.num_rows)
        column_count = len(pf.schema_arrow)
        row_group_rows = tuple(
            int(meta.row_group(i).num_rows) for i in range(meta.num_row_groups)
        )

        column_names: tuple[str, ...] = ()
        if meta.num_row_groups > 0:
            first = next(pf.iter_batches(batch_size=1), None)
            if first is not None:
                column_names = tuple(first.schema.names)
    except (pa.ArrowException, OSError) as exc:
        raise MetadataFailure(f"Cannot read metadata of {source.path}: {exc}") from exc
    finally:
        pf.close()

    logger.debug(
        "probed %s: %d rows, %d columns, %d row groups",
        source.path,
        row_count,
        column_count,
        len(row_group_rows),
    )
    return FileMetadata(row_count, column_count, column_names, row_group_rows)
