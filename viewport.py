import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional

from errors import PreviewError

logger = logging.getLogger(__name__)

ROW_HEIGHT = 1


@dataclass(frozen=True)
class RowWindow:
    start: int = 0
    cells: tuple[tuple[str, ...], ...] = ()

    @property
    def end(self) -> int:
        return self.start + len(self.cells)

    def __len__(self):
        return len(self.cells)


@dataclass(frozen=True)
class ViewState:
    window: RowWindow = RowWindow()
    page_size: int = 1
    selection: Optional[tuple[int, int]] = None


FetchRows = Callable[[int, int], list]


def page_size_for_height(height, row_height=ROW_HEIGHT) -> int:
    if row_height <= 0:
        raise ValueError("row_height must be positive")
    return max(1, int(height // row_height))


def max_start(row_count: int, page_size: int) -> int:
    return max(0, row_count - page_size)


def load_window(state: ViewState, row_count: int, start: int, fetch_rows: FetchRows):
    """Return (next_state, error). On error the state comes back unchanged."""
    if row_count == 0:
        return replace(state, window=RowWindow()), None

    start = max(0, min(start, row_count - 1))
    count = min(state.page_size, row_count - start)
    try:
        rows = fetch_rows(start, count)
    except PreviewError as exc:
        logger.error("failed to load rows %d..%d for viewport: %s", start, start + count, exc)
        return state, exc

    window = RowWindow(start, tuple(tuple(r) for r in rows))
    return replace(state, window=window), None


def resize(state: ViewState, row_count: int, height, fetch_rows: FetchRows, row_height=ROW_HEIGHT):
    page_size = page_size_for_height(height, row_height)
    if page_size == state.page_size:
        return state, None
    resized = replace(state, page_size=page_size)
    if row_count == 0:
        return replace(resized, window=RowWindow()), None
    next_state, error = load_window(resized, row_count, state.window.start, fetch_rows)
    if error is not None:
        # keep the new page size so the next event retries with it
        return resized, error
    return next_state, None


def scroll(state: ViewState, row_count: int, delta_rows: int, fetch_rows: FetchRows):
    if row_count == 0:
        return state, None
    target = state.window.start + delta_rows
    target = max(0, min(target, max_start(row_count, state.page_size)))
    if target == state.window.start:
        return state, None
    return load_window(state, row_count, target, fetch_rows)


def select_cell(state: ViewState, local_row: int, column: int) -> ViewState:
    return replace(state, selection=(state.window.start + local_row, column))


class ViewportController:
    """Owns the current ViewState for one preview session.

    Every event runs to completion and swaps in a whole new state; a failed
    fetch leaves the previous window displayed.
    """

    def __init__(self, session, row_height=ROW_HEIGHT, fetch_rows: FetchRows | None = None):
        self.session = session
        self.row_height = row_height
        self.fetch_rows = fetch_rows if fetch_rows is not None else session.fetch
        self._state = ViewState()
        self.last_error: PreviewError | None = None

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def window(self) -> RowWindow:
        return self._state.window

    @property
    def row_count(self) -> int:
        return self.session.row_count

    def _apply(self, result):
        next_state, error = result
        self._state = next_state
        self.last_error = error
        return self._state

    def initial_window(self, height) -> ViewState:
        base = ViewState(page_size=page_size_for_height(height, self.row_height))
        self._state = base
        return self._apply(load_window(base, self.row_count, 0, self.fetch_rows))

    def on_resize(self, height) -> ViewState:
        return self._apply(
            resize(self._state, self.row_count, height, self.fetch_rows, self.row_height)
        )

    def on_scroll(self, delta_rows: int) -> ViewState:
        return self._apply(scroll(self._state, self.row_count, delta_rows, self.fetch_rows))

    def on_scroll_px(self, delta_px) -> ViewState:
        return self.on_scroll(int(delta_px / self.row_height))

    def on_cell_click(self, local_row: int, column: int) -> ViewState:
        self._state = select_cell(self._state, local_row, column)
        return self._state

    def jump_to(self, start: int) -> ViewState:
        return self.on_scroll(start - self._state.window.start)

    def page_down(self) -> ViewState:
        return self.on_scroll(self._state.page_size)

    def page_up(self) -> ViewState:
        return self.on_scroll(-self._state.page_size)
