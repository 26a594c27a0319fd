import os
import time


def range_text(row_count, window_start, window_len):
    if row_count == 0:
        return "No rows available"
    end = min(window_start + window_len, row_count)
    return f"Showing rows {window_start + 1}-{max(end, window_start + 1)}"


def selection_text(selection):
    if selection is None:
        return "Click a cell to select it"
    row, col = selection
    return f"Selected: row {row + 1}, column {col + 1}"


def render_status(context, width):
    """
    context keys: status_msg, status_until, file_path, row_count, column_count,
                  window_start, window_len, selection
    """
    now = time.time()
    if context.get("status_msg") and now < context.get("status_until", 0):
        text = f" {context['status_msg']}"
    else:
        fname = context.get("file_path") or ""
        if fname:
            fname = os.path.basename(fname)
        row_count = context.get("row_count", 0)
        column_count = context.get("column_count", 0)
        shown = range_text(
            row_count, context.get("window_start", 0), context.get("window_len", 0)
        )
        selected = selection_text(context.get("selection"))
        text = f" {fname} | Rows: {row_count} | Columns: {column_count} | {shown} | {selected}"

    return text.ljust(width)[:width]
