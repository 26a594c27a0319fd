import curses


class GridPane:
    PAIR_CELL_TEXT = 1
    PAIR_HEADER = 2
    MAX_COL_WIDTH = 40
    HEADER_Y = 0
    FIRST_ROW_Y = 1

    def __init__(self, column_names, column_count=None):
        self.column_names = list(column_names)
        if column_count is not None and column_count > len(self.column_names):
            self.column_names += [
                str(i) for i in range(len(self.column_names), column_count)
            ]
        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(self.PAIR_CELL_TEXT, curses.COLOR_WHITE, -1)
            curses.init_pair(self.PAIR_HEADER, curses.COLOR_CYAN, -1)
        except curses.error:
            pass

        self.col_offset = 0
        # (x, width) of each drawn column, keyed by column index
        self.rendered_cols: dict[int, tuple[int, int]] = {}
        self.rendered_rows = 0

    @property
    def column_total(self) -> int:
        return len(self.column_names)

    def column_widths(self, window):
        """Widths from the header and the rows currently materialized only."""
        widths = []
        for c, name in enumerate(self.column_names):
            max_len = len(str(name))
            for row in window.cells:
                if c < len(row):
                    max_len = max(max_len, len(row[c]))
            widths.append(min(self.MAX_COL_WIDTH, max_len + 2))
        return widths

    @staticmethod
    def gutter_width(window) -> int:
        return max(3, len(str(max(window.end, 1))) + 1)

    def scroll_columns(self, delta: int):
        if self.column_total == 0:
            self.col_offset = 0
            return
        self.col_offset = max(0, min(self.column_total - 1, self.col_offset + delta))

    def layout_columns(self, window, width: int) -> int:
        """Place visible columns from col_offset; returns the gutter width."""
        widths = self.column_widths(window)
        row_w = self.gutter_width(window)

        self.rendered_cols = {}
        x = row_w + 1
        for c in range(self.col_offset, self.column_total):
            if x >= width - 1:
                break
            eff_cw = min(widths[c], max(1, width - x - 1))
            self.rendered_cols[c] = (x, eff_cw)
            x += eff_cw + 1
        self.rendered_rows = len(window.cells)
        return row_w

    def cell_at(self, y: int, x: int):
        """Map a table-window coordinate to (window-local row, column)."""
        local_row = y - self.FIRST_ROW_Y
        if local_row < 0 or local_row >= self.rendered_rows:
            return None
        for c, (cx, cw) in self.rendered_cols.items():
            if cx <= x < cx + cw:
                return local_row, c
        return None

    def draw(self, win, window, selection=None):
        win.erase()
        try:
            win.bkgd(" ", curses.color_pair(self.PAIR_CELL_TEXT))
        except curses.error:
            pass
        h, w = win.getmaxyx()

        row_w = self.layout_columns(window, w)

        # header
        header_attr = curses.A_BOLD | curses.color_pair(self.PAIR_HEADER)
        for c, (cx, cw) in self.rendered_cols.items():
            name = str(self.column_names[c])[:cw].rjust(cw)
            try:
                win.addnstr(self.HEADER_Y, cx, name, cw, header_attr)
            except curses.error:
                pass

        # rows, numbered in the file's global index space
        self.rendered_rows = 0
        for local_row, row in enumerate(window.cells):
            y = self.FIRST_ROW_Y + local_row
            if y >= h:
                break
            abs_r = window.start + local_row
            try:
                win.addnstr(y, 0, str(abs_r).rjust(row_w), row_w)
            except curses.error:
                pass
            for c, (cx, cw) in self.rendered_cols.items():
                text = row[c] if c < len(row) else ""
                attr = curses.color_pair(self.PAIR_CELL_TEXT)
                if selection == (abs_r, c):
                    attr |= curses.A_REVERSE
                try:
                    win.addnstr(y, cx, text[:cw].rjust(cw), cw, attr)
                except curses.error:
                    pass
            self.rendered_rows += 1

        win.refresh()
