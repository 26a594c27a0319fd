import logging
from dataclasses import dataclass

from metadata_probe import FileMetadata, probe
from range_fetcher import fetch, format_table
from source_handle import SourceHandle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreviewSession:
    source: SourceHandle
    metadata: FileMetadata
    initial_rows: tuple[tuple[str, ...], ...]
    initial_summary: str

    @property
    def row_count(self) -> int:
        return self.metadata.row_count

    @property
    def column_count(self) -> int:
        return self.metadata.column_count

    @property
    def column_names(self) -> tuple[str, ...]:
        return self.metadata.column_names

    def fetch(self, start: int, count: int):
        return fetch(self.source, start, count, self.metadata)


def load_preview(path, row_limit: int) -> PreviewSession:
    logger.info("loading parquet file %s (rows=%d)", path, row_limit)
    source = SourceHandle(path)
    metadata = probe(source)
    preview_limit = max(0, min(row_limit, metadata.row_count))
    rows = fetch(source, 0, preview_limit, metadata)
    return PreviewSession(
        source=source,
        metadata=metadata,
        initial_rows=tuple(tuple(r) for r in rows),
        initial_summary=format_table(metadata.column_names, rows),
    )


def render_headless(session: PreviewSession) -> str:
    return (
        f"Rows: {session.row_count} | Columns: {session.column_count}\n\n"
        f"{session.initial_summary}"
    )
