"""Screen rendering.

``render()`` turns a ``RunState`` into the full screen as one string. It
only reads the state, so the event loop can call it after every event,
spinner ticks included.
"""

from __future__ import annotations

import click

from reclaim.core.viewport import available_rows, compute_viewport
from reclaim.tui.state import LARGE_FILE_LIST_CHROME, MAIN_LIST_CHROME, SCAN_LIST_CHROME, Phase, RunState
from reclaim.utils import bytes_to_human

TITLE = "Reclaim: Linux System Cleaner"
SPINNER = "⣾⣽⣻⢿⡿⣟⣯⣷"
NAME_WIDTH = 35
SIZE_WIDTH = 12
CLEAN_BUTTON = "[ CLEAN SELECTED ITEMS ]"


def _subtle(text: str) -> str:
    return click.style(text, fg="bright_black")


def _accent(text: str) -> str:
    return click.style(text, fg="magenta", bold=True)


def _truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: width - 3] + "..."


def _clip(text: str, width: int) -> str:
    """Cut plain *text* to fit a terminal row *width* columns wide."""
    return _truncate(text, max(4, width - 1))


def _truncate_left(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return "..." + text[len(text) - (width - 3):]


def spinner_glyph(state: RunState) -> str:
    return click.style(SPINNER[state.spinner_frame % len(SPINNER)], fg="magenta")


def render(state: RunState) -> str:
    """Render the whole screen for the current phase.

    The frame never has more lines than fit above the bottom row, which
    the trailing newline moves onto.
    """
    if state.quitting:
        return "Bye!\n"

    lines = [" " + _accent(TITLE), " " + _subtle("─" * max(10, min(state.width - 2, 60))), ""]
    match state.phase:
        case Phase.SCANNING:
            lines += _render_scanning(state)
        case Phase.REVIEW:
            lines += _render_review(state)
        case Phase.LARGE_FILE_SELECTION:
            lines += _render_large_files(state)
        case Phase.CONFIRM:
            lines += _render_confirm(state)
        case Phase.CLEANING:
            lines += _render_cleaning(state)
        case Phase.DONE:
            lines += _render_done(state)
    return "\n".join(lines[: max(1, state.height - 1)]) + "\n"


def _render_scanning(state: RunState) -> list[str]:
    lines = [f" {spinner_glyph(state)} Scanning system... ({state.scans_received}/{state.scans_dispatched})", ""]
    view = compute_viewport(
        state.selection.first_pending(), len(state.items), available_rows(state.height, SCAN_LIST_CHROME)
    )
    if view.more_above:
        lines.append(_subtle("   ↑ more items above"))
    for i in view:
        item = state.items[i]
        if item.skip:
            status = click.style("Requires root", fg="yellow")
        elif not item.scanned:
            status = _subtle("...")
        elif item.error:
            status = click.style("ERROR", fg="red")
        else:
            status = bytes_to_human(item.size)
        room = state.width - len(click.unstyle(status)) - 1
        name = _clip(f"  {_truncate(item.name, NAME_WIDTH):<{NAME_WIDTH}}", room)
        lines.append(f"{name} {status}")
    if view.more_below:
        lines.append(_subtle("   ↓ more items below"))
    return lines


def _size_column(state: RunState, index: int) -> tuple[str, str, str | None]:
    """Size text, trailing hint and the hint's colour for a review row."""
    selection = state.selection
    item = state.items[index]
    if item.skip:
        return "Root req.", "", None
    if item.error:
        return "error", f" ({_truncate(item.error, 40)})", "red"
    size = bytes_to_human(item.size)
    if selection.is_drilldown(index):
        if selection.selected_count > 0:
            size = f"{bytes_to_human(selection.selected_size)} / {size}"
            return size, f" ({selection.selected_count} files selected)", "green"
        if item.size > 0:
            return size, " (Enter/Space to detail)", "bright_black"
    return size, "", None


def _render_review(state: RunState) -> list[str]:
    lines = [" Select items to clean:", ""]
    lines.append(_subtle(_clip(f"{'':8}{'Name':<{NAME_WIDTH}} {'Size':>{SIZE_WIDTH}}", state.width)))

    view = compute_viewport(state.cursor, state.button_index + 1, available_rows(state.height, MAIN_LIST_CHROME))
    if view.more_above:
        lines.append(_subtle("   ↑ more items above"))

    for i in view:
        if i == state.button_index:
            continue
        item = state.items[i]
        at_cursor = i == state.cursor
        if item.selected:
            check = "[x]"
        elif item.skip:
            check = "[-]"
        else:
            check = "[ ]"
        size, hint, hint_color = _size_column(state, i)
        marker = " > " if at_cursor else "   "
        row = f"{marker} {check} {_truncate(item.name, NAME_WIDTH):<{NAME_WIDTH}} {size:>{SIZE_WIDTH}}"
        row = _clip(row, state.width)
        room = state.width - 1 - len(row)
        hint = _truncate(hint, room) if hint and room >= 4 else ""
        if at_cursor:
            row = click.style(row, fg="magenta", bold=True)
        elif item.skip or not item.selected:
            row = _subtle(row)
        if hint:
            row += click.style(hint, fg=hint_color)
        lines.append(row)

    if view.more_below:
        lines.append(_subtle("   ↓ more items below"))

    lines.append("")
    selected = bytes_to_human(state.selection.total_selected)
    lines.append(" " + click.style(f"Total Selected to Clean: {selected}", fg="green"))
    lines.append(" " + _subtle(f"Total Reclaimable: {bytes_to_human(state.total_reclaimable)}"))
    lines.append("")

    if view.end == view.total:
        if state.cursor == state.button_index:
            lines.append(" > " + _accent(CLEAN_BUTTON))
        else:
            lines.append("   " + _subtle(CLEAN_BUTTON))
    else:
        lines.append("")

    lines.append("")
    help_line = " ↑/↓: Navigate • Space: Toggle • Enter: Clean/Details • c: Clean • q: Quit"
    lines.append(_subtle(_clip(help_line, state.width)))
    return lines


def _render_large_files(state: RunState) -> list[str]:
    lines = [" Select Large Files to Delete:", ""]
    if not state.large_files:
        lines.append(_subtle("  No large unused files found."))
    else:
        path_width = max(20, state.width - 25)
        lines.append(_subtle(_clip(f"{'':8}{'Path':<{path_width}} {'Size':>10}", state.width)))
        view = compute_viewport(
            state.lf_cursor, len(state.large_files), available_rows(state.height, LARGE_FILE_LIST_CHROME)
        )
        if view.more_above:
            lines.append(_subtle("   ↑ more files above"))
        for i in view:
            entry = state.large_files[i]
            at_cursor = i == state.lf_cursor
            check = "[x]" if entry.selected else "[ ]"
            path = _truncate_left(entry.path, path_width)
            row = f"{' > ' if at_cursor else '   '} {check} {path:<{path_width}} {bytes_to_human(entry.size):>10}"
            row = _clip(row, state.width)
            if at_cursor:
                row = click.style(row, fg="magenta", bold=True)
            elif not entry.selected:
                row = _subtle(row)
            lines.append(row)
        if view.more_below:
            lines.append(_subtle("   ↓ more files below"))
        lines.append("")
        lines.append(
            " "
            + click.style(
                f"{state.selection.selected_count} selected, {bytes_to_human(state.selection.selected_size)}",
                fg="green",
            )
        )

    lines.append("")
    lines.append(_subtle(_clip(" ↑/↓: Navigate • Space/Enter: Toggle • Esc/Back: Save & Return", state.width)))
    return lines


def _box(content: list[str]) -> list[str]:
    inner = max(len(click.unstyle(line)) for line in content) + 8
    out = ["╭" + "─" * inner + "╮", "│" + " " * inner + "│"]
    for line in content:
        pad = inner - len(click.unstyle(line))
        left = pad // 2
        out.append("│" + " " * left + line + " " * (pad - left) + "│")
    out += ["│" + " " * inner + "│", "╰" + "─" * inner + "╯"]
    return out


def _render_confirm(state: RunState) -> list[str]:
    selection = state.selection
    content = [
        _accent("Confirmation Required"),
        "",
        f"Ready to clean {selection.selected_categories()} categories.",
        f"Total size to delete: {bytes_to_human(selection.total_selected)}",
        "",
        "Proceed? (y/N)",
    ]
    box = _box(content)
    top = max(0, (state.height - 4) // 2 - 3 - len(box) // 2)
    indent = " " * max(0, (state.width - len(box[0])) // 2)
    return [""] * top + [indent + line for line in box]


def _clean_rows(state: RunState) -> list[str]:
    rows = []
    for item in state.items:
        if not item.selected or item.skip:
            continue
        if not item.cleaned:
            icon, status = "•", _subtle("Waiting...")
        elif item.error:
            failed = _clip(f"FAILED: {item.error}", state.width - NAME_WIDTH - 5)
            icon, status = click.style("✗", fg="red"), click.style(failed, fg="red")
        else:
            icon, status = click.style("✓", fg="green"), click.style("Done", fg="green")
        rows.append(f"  {icon} {_truncate(item.name, NAME_WIDTH):<{NAME_WIDTH}} {status}")
    return rows


def _render_cleaning(state: RunState) -> list[str]:
    header = f" {spinner_glyph(state)} Cleaning selected items... ({state.cleans_received}/{state.cleans_dispatched})"
    return [header, ""] + _clean_rows(state)


def _render_done(state: RunState) -> list[str]:
    freed = sum(item.freed for item in state.items if item.cleaned)
    lines = [" " + click.style("Cleanup Complete!", fg="green", bold=True), ""]
    lines += _clean_rows(state)
    lines += ["", " " + click.style(f"Freed: {bytes_to_human(freed)}", fg="green", bold=True)]
    return lines
