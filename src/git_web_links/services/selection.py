"""Selection extraction — turn editor selections into a one-based range."""

from __future__ import annotations

from git_web_links.domain.entities import SelectedRange, TextEditor


def get_selected_range(editor: TextEditor) -> SelectedRange | None:
    """Return the primary selection of *editor* as a :class:`SelectedRange`.

    Returns ``None`` when the editor has no selection or when the selection is
    empty (just a cursor).  Editor positions are zero-based; the range is
    one-based.  A selection ending at the very start of a line, which is what
    selecting whole lines produces, ends on the previous line instead.
    """
    selection = editor.selection
    if selection is None or selection.is_empty:
        return None

    start = selection.start
    end = selection.end

    if end.character == 0 and end.line > start.line:
        return SelectedRange(start_line=start.line + 1, end_line=end.line)

    return SelectedRange(
        start_line=start.line + 1,
        start_column=start.character + 1,
        end_line=end.line + 1,
        end_column=end.character + 1,
    )
