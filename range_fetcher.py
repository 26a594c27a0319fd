import logging

import pandas as pd
import pyarrow as pa
import pyarrow.compute as pc

from errors import DecodeFailure, ReadFailure
from metadata_probe import FileMetadata

logger = logging.getLogger(__name__)

NULL_TEXT = "null"
EMPTY_TABLE_TEXT = "(no rows found)"
OUT_OF_RANGE_TEXT = "<value out of range>"


def _row_group_offsets(row_group_rows):
    offsets = []
    pos = 0
    for n in row_group_rows:
        offsets.append(pos)
        pos += n
    return offsets


def select_row_groups(row_group_rows, start: int, count: int):
    """Return (row group indices overlapping [start, start+count), rows to skip
    at the front of the first selected group)."""
    if count <= 0:
        return [], 0
    end = start + count
    groups = []
    skip = 0
    for idx, (offset, n) in enumerate(
        zip(_row_group_offsets(row_group_rows), row_group_rows)
    ):
        if n == 0 or offset + n <= start:
            continue
        if offset >= end:
            break
        if not groups:
            skip = max(0, start - offset)
        groups.append(idx)
    return groups, skip


def _is_nested(data_type) -> bool:
    return (
        pa.types.is_list(data_type)
        or pa.types.is_large_list(data_type)
        or pa.types.is_fixed_size_list(data_type)
        or pa.types.is_struct(data_type)
        or pa.types.is_map(data_type)
        or pa.types.is_union(data_type)
    )


def _is_binary(data_type) -> bool:
    return (
        pa.types.is_binary(data_type)
        or pa.types.is_large_binary(data_type)
        or pa.types.is_fixed_size_binary(data_type)
    )


def format_value(value) -> str:
    """Arrow-style text for a converted Python value; nested nulls print as null."""
    if value is None:
        return NULL_TEXT
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray)):
        return value.hex()
    if isinstance(value, dict):
        items = ", ".join(f"{k}: {format_value(v)}" for k, v in value.items())
        return "{" + items + "}"
    if isinstance(value, tuple) and len(value) == 2:
        # map entries come back as (key, value) pairs
        return f"{format_value(value[0])}: {format_value(value[1])}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(format_value(v) for v in value) + "]"
    return str(value)


def _render_scalar(scalar) -> str:
    if not scalar.is_valid:
        return NULL_TEXT
    try:
        return format_value(scalar.as_py())
    except (ValueError, OverflowError):
        return OUT_OF_RANGE_TEXT


def render_column(column) -> list[str]:
    """Display strings for one Arrow column, one per row."""
    data_type = column.type
    if _is_binary(data_type):
        return [NULL_TEXT if v is None else v.hex() for v in column.to_pylist()]
    if not _is_nested(data_type):
        try:
            text = pc.cast(column, pa.string())
        except pa.ArrowException:
            pass
        else:
            return [NULL_TEXT if v is None else v for v in text.to_pylist()]
    return [_render_scalar(column[i]) for i in range(len(column))]


def batch_to_rows(batch, row_limit: int):
    if batch.num_rows > row_limit:
        batch = batch.slice(0, row_limit)
    columns = [render_column(col) for col in batch.columns]
    if not columns:
        return [[] for _ in range(batch.num_rows)]
    return [list(row) for row in zip(*columns)]


def fetch(source, start: int, count: int, metadata: FileMetadata | None = None):
    """Materialize rows [start, start+count) as display strings.

    Row groups outside the range are never read. Returns fewer than `count`
    rows when the file ends first, and nothing when start is past the end.
    """
    if count <= 0:
        return []
    start = max(0, start)

    pf = source.open()
    try:
        if metadata is not None:
            row_group_rows = metadata.row_group_rows
        else:
            meta = pf.metadata
            row_group_rows = tuple(
                meta.row_group(i).num_rows for i in range(meta.num_row_groups)
            )

        groups, skip = select_row_groups(row_group_rows, start, count)
        if not groups:
            return []

        logger.debug(
            "fetching rows %d..%d from %s (row groups %s)",
            start,
            start + count,
            source.path,
            groups,
        )

        rows = []
        for batch in pf.iter_batches(batch_size=count + skip, row_groups=groups):
            if skip:
                if batch.num_rows <= skip:
                    skip -= batch.num_rows
                    continue
                batch = batch.slice(skip)
                skip = 0
            rows.extend(batch_to_rows(batch, count - len(rows)))
            if len(rows) >= count:
                break
        return rows
    except OSError as exc:
        raise ReadFailure(f"Failed to read rows from {source.path}: {exc}") from exc
    except (pa.ArrowException, ValueError, OverflowError) as exc:
        raise DecodeFailure(f"Failed to decode rows from {source.path}: {exc}") from exc
    finally:
        pf.close()


def format_table(column_names, rows) -> str:
    if not rows:
        return EMPTY_TABLE_TEXT
    names = list(column_names)
    width = len(rows[0])
    if len(names) != width:
        names = [str(i) for i in range(width)]
    df = pd.DataFrame(rows, columns=names)
    return df.to_string(index=False)
