"""Pure projection of selector state into styled screen rows.

Nothing here writes to the terminal; ``project_view`` returns the rows and
``ssmssh.render.render_frame`` paints them.
"""

from __future__ import annotations

from ..ansi import clip_ansi_line, display_width, pad_ansi_line
from ..runtime.navigator import SPINNER_FRAMES, SelectorState, Stage
from ..ui_theme import UITheme

DEFAULT_WINDOW_ROWS = 20
BOX_PAD_X = 2
BOX_PAD_Y = 1
FOOTER_HINT = "enter: select  esc: quit"

_STAGE_HEADERS = {
    Stage.PROFILE: "Select AWS profile",
    Stage.REGION: "Select AWS region",
    Stage.INSTANCE: "Select EC2 instance",
}


def _paint(code: str, text: str, theme: UITheme) -> str:
    if not code:
        return text
    return f"{code}{text}{theme.reset}"


def list_window(count: int, cursor: int, window_rows: int) -> range:
    """Return indices of at most ``window_rows`` rows centered on ``cursor``.

    The window clamps to list bounds instead of padding past either end.
    """
    window_rows = max(1, window_rows)
    start = max(0, cursor - window_rows // 2)
    end = start + window_rows
    if end > count:
        end = count
        start = max(0, end - window_rows)
    return range(start, end)


def box(lines: list[str], theme: UITheme) -> list[str]:
    """Surround ``lines`` with a rounded border and inner padding."""
    inner = max((display_width(line) for line in lines), default=0) + 2 * BOX_PAD_X
    top = _paint(theme.border, "╭" + "─" * inner + "╮", theme)
    bottom = _paint(theme.border, "╰" + "─" * inner + "╯", theme)
    side = _paint(theme.border, "│", theme)
    blank = f"{side}{' ' * inner}{side}"
    out = [top]
    out.extend([blank] * BOX_PAD_Y)
    for line in lines:
        body = pad_ansi_line(" " * BOX_PAD_X + line, inner)
        out.append(f"{side}{body}{side}")
    out.extend([blank] * BOX_PAD_Y)
    out.append(bottom)
    return out


def join_horizontal(left: list[str], right: list[str], gap: int = 1) -> list[str]:
    """Place two blocks side by side, top-aligned."""
    left_width = max((display_width(line) for line in left), default=0)
    height = max(len(left), len(right))
    out: list[str] = []
    for row in range(height):
        left_line = left[row] if row < len(left) else ""
        right_line = right[row] if row < len(right) else ""
        out.append(pad_ansi_line(left_line, left_width) + " " * gap + right_line)
    return out


def _spinner(state: SelectorState, theme: UITheme) -> str:
    return _paint(theme.spinner, SPINNER_FRAMES[state.spinner_frame % len(SPINNER_FRAMES)], theme)


def _context_line(state: SelectorState) -> str:
    if state.stage is Stage.REGION:
        return f"Profile:{state.selected_profile}"
    if state.stage is Stage.INSTANCE:
        return f"Profile:{state.selected_profile} | Region:{state.selected_region}"
    return ""


def _selection_lines(state: SelectorState, theme: UITheme, window_rows: int) -> list[str]:
    lines = [_paint(theme.header, f" {_STAGE_HEADERS[state.stage]} ", theme)]
    context = _context_line(state)
    if context:
        lines.append(_paint(theme.info, context, theme))
    lines.append(_paint(theme.info, f"Search:{state.query}", theme))
    for idx in list_window(len(state.filtered), state.cursor, window_rows):
        entry = state.filtered[idx]
        if idx == state.cursor:
            lines.append(_paint(theme.selected, f"> {entry}", theme))
        else:
            lines.append(_paint(theme.item, f"  {entry}", theme))
    lines.append(_paint(theme.hint, FOOTER_HINT, theme))
    return lines


def _preview_lines(state: SelectorState, theme: UITheme) -> list[str]:
    preview = state.preview
    if not state.filtered:
        return [_paint(theme.info, "No instance selected.", theme)]
    if preview.loading:
        return [f"{_spinner(state, theme)} {_paint(theme.info, 'Loading tags...', theme)}"]
    if preview.tags:
        lines = [_paint(theme.header, " Instance Tags ", theme)]
        lines.extend(_paint(theme.info, f"{tag.key}: {tag.value}", theme) for tag in preview.tags)
        return lines
    return [_paint(theme.info, "No tags found.", theme)]


def project_view(
    state: SelectorState,
    theme: UITheme,
    *,
    window_rows: int = DEFAULT_WINDOW_ROWS,
    width: int | None = None,
) -> list[str]:
    """Return the styled screen rows for ``state``.

    Rows are clipped to ``width`` columns when given.
    """
    if state.error is not None:
        rows = [_paint(theme.error, f"Error: {state.error}", theme)]
    elif state.loading:
        rows = box([f"{_spinner(state, theme)} {_paint(theme.info, 'Loading...', theme)}"], theme)
    elif state.stage is Stage.DONE:
        summary = (
            f"Selected: Profile={state.selected_profile}, "
            f"Region={state.selected_region}, Instance={state.selected_instance}"
        )
        rows = box(
            [
                _paint(theme.header, " Session Starting ", theme),
                _paint(theme.info, summary, theme),
                _paint(theme.info, "Starting SSM session...", theme),
            ],
            theme,
        )
    elif state.stage is Stage.INSTANCE:
        rows = join_horizontal(
            box(_selection_lines(state, theme, window_rows), theme),
            box(_preview_lines(state, theme), theme),
        )
    else:
        rows = box(_selection_lines(state, theme, window_rows), theme)

    if width is not None:
        rows = [clip_ansi_line(row, width) for row in rows]
    return rows


__all__ = [
    "DEFAULT_WINDOW_ROWS",
    "FOOTER_HINT",
    "list_window",
    "box",
    "join_horizontal",
    "project_view",
]
