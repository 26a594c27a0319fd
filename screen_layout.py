import curses


class ScreenLayout:
    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.H, self.W = stdscr.getmaxyx()

        # layout: title line, table (column header + rows), status bar
        self.title_h = 1
        self.status_h = 1
        self.table_h = max(2, self.H - self.title_h - self.status_h)
        self.table_y = self.title_h

        self.title_win = curses.newwin(self.title_h, self.W, 0, 0)
        self.title_win.leaveok(True)

        self.table_win = curses.newwin(self.table_h, self.W, self.table_y, 0)
        # grid pane must never own cursor
        self.table_win.leaveok(True)

        status_y = min(self.H - 1, self.table_y + self.table_h)
        self.status_win = curses.newwin(self.status_h, self.W, status_y, 0)
        self.status_win.leaveok(True)

    @property
    def rows_height(self) -> int:
        """Lines available for data rows (table minus its column header)."""
        return max(1, self.table_h - 1)
