import os

import pyarrow as pa
import pyarrow.parquet as pq

from errors import MetadataFailure, OpenFailure


class SourceHandle:
    SUPPORTED_EXTENSIONS = {".parquet", ".parq", ".pq"}

    def __init__(self, path: str):
        self.path = os.fspath(path)
        _, ext = os.path.splitext(self.path)
        self.ext = ext.lower()

        if self.ext not in self.SUPPORTED_EXTENSIONS:
            raise OpenFailure(
                f"Unsupported file type: {self.path} (use .parquet, .parq, or .pq)"
            )

    def __repr__(self):
        return f"SourceHandle({self.path!r})"

    def open(self) -> pq.ParquetFile:
        """Open a fresh reader; callers never share one between reads."""
        if not os.path.exists(self.path):
            raise OpenFailure(f"No such file: {self.path}")
        if os.path.isdir(self.path):
            raise OpenFailure(f"Is a directory: {self.path}")
        try:
            return pq.ParquetFile(self.path)
        except (FileNotFoundError, PermissionError) as exc:
            raise OpenFailure(f"Cannot open {self.path}: {exc}") from exc
        except (pa.ArrowInvalid, pa.ArrowNotImplementedError) as exc:
            raise MetadataFailure(f"Not a readable parquet file: {self.path}: {exc}") from exc
        except OSError as exc:
            raise OpenFailure(f"Cannot open {self.path}: {exc}") from exc
