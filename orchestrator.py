import curses
import logging
import time

from grid_pane import GridPane
from screen_layout import ScreenLayout
from status_bar import render_status
from viewport import ViewportController

logger = logging.getLogger(__name__)

KEY_CTRL_B = 2
KEY_CTRL_C = 3
KEY_CTRL_F = 6
KEY_CTRL_X = 24
KEY_ENTER = (10, 13, curses.KEY_ENTER)

QUIT_KEYS = (ord("q"), KEY_CTRL_C, KEY_CTRL_X)

# ncurses reports wheel-down as BUTTON5 where available
WHEEL_UP = getattr(curses, "BUTTON4_PRESSED", 0)
WHEEL_DOWN = getattr(curses, "BUTTON5_PRESSED", 0)


class Orchestrator:
    def __init__(self, stdscr, session, config):
        self.stdscr = stdscr
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        curses.raw()
        self.stdscr.keypad(True)
        self.stdscr.timeout(100)
        curses.mousemask(curses.ALL_MOUSE_EVENTS | curses.REPORT_MOUSE_POSITION)

        self.session = session
        self.scroll_step = config.get("SCROLL_STEP", 3)
        self.layout = ScreenLayout(stdscr)
        self.grid = GridPane(session.column_names, session.column_count)

        # ---- status ----
        self.status_msg = None
        self.status_msg_until = 0

        # one terminal line per row
        self.viewport = ViewportController(session)
        self.viewport.initial_window(self.layout.rows_height)
        self._report_error()

    # ---------------- helpers ----------------

    def _set_status(self, msg, seconds=3):
        self.status_msg = msg
        self.status_msg_until = time.time() + seconds

    def _report_error(self):
        error = self.viewport.last_error
        if error is not None:
            self._set_status(f"Load failed: {error}"[: max(1, self.layout.W - 2)], 5)

    # ---------------- events ----------------

    def handle_resize(self):
        curses.update_lines_cols()
        self.stdscr.clear()
        self.layout = ScreenLayout(self.stdscr)
        logger.debug("terminal resized to %dx%d", self.layout.W, self.layout.H)
        self.viewport.on_resize(self.layout.rows_height)
        self._report_error()

    def handle_mouse(self):
        try:
            _, mx, my, _, bstate = curses.getmouse()
        except curses.error:
            return
        if WHEEL_UP and bstate & WHEEL_UP:
            self.viewport.on_scroll(-self.scroll_step)
            self._report_error()
            return
        if WHEEL_DOWN and bstate & WHEEL_DOWN:
            self.viewport.on_scroll(self.scroll_step)
            self._report_error()
            return
        if bstate & (curses.BUTTON1_CLICKED | curses.BUTTON1_PRESSED):
            hit = self.grid.cell_at(my - self.layout.table_y, mx)
            if hit is not None:
                self.viewport.on_cell_click(*hit)

    def handle_key(self, ch):
        vp = self.viewport
        if ch in (ord("j"), curses.KEY_DOWN):
            vp.on_scroll(1)
        elif ch in (ord("k"), curses.KEY_UP):
            vp.on_scroll(-1)
        elif ch in (curses.KEY_NPAGE, ord(" "), KEY_CTRL_F):
            vp.page_down()
        elif ch in (curses.KEY_PPAGE, ord("b"), KEY_CTRL_B):
            vp.page_up()
        elif ch in (ord("g"), curses.KEY_HOME):
            vp.jump_to(0)
        elif ch in (ord("G"), curses.KEY_END):
            vp.jump_to(vp.row_count)
        elif ch in (ord("h"), curses.KEY_LEFT):
            self.grid.scroll_columns(-1)
        elif ch in (ord("l"), curses.KEY_RIGHT):
            self.grid.scroll_columns(1)
        elif ch in KEY_ENTER:
            if len(vp.window):
                vp.on_cell_click(0, self.grid.col_offset)
        else:
            return
        self._report_error()

    # ---------------- UI ----------------

    def redraw(self):
        state = self.viewport.state
        title = f" parqview: {self.session.source.path}"
        tw = self.layout.title_win
        tw.erase()
        try:
            tw.addnstr(0, 0, title.ljust(self.layout.W), self.layout.W, curses.A_BOLD)
        except curses.error:
            pass
        tw.refresh()

        self.grid.draw(self.layout.table_win, state.window, state.selection)

        context = {
            "status_msg": self.status_msg,
            "status_until": self.status_msg_until,
            "file_path": self.session.source.path,
            "row_count": self.session.row_count,
            "column_count": self.session.column_count,
            "window_start": state.window.start,
            "window_len": len(state.window),
            "selection": state.selection,
        }
        sw = self.layout.status_win
        sw.erase()
        _, w = sw.getmaxyx()
        try:
            sw.addnstr(0, 0, render_status(context, w), w)
        except curses.error:
            pass
        sw.refresh()

    # ---------------- main loop ----------------

    def run(self):
        self.stdscr.clear()
        self.stdscr.refresh()
        self.redraw()

        while True:
            ch = self.stdscr.getch()

            if ch in QUIT_KEYS:
                break

            if ch == curses.KEY_RESIZE:
                self.handle_resize()
            elif ch == curses.KEY_MOUSE:
                self.handle_mouse()
            elif ch != -1:
                self.handle_key(ch)

            self.redraw()
