"""Colours, reusable styles and plain-text layout for terminal rendering."""

from __future__ import annotations

import re
from dataclasses import dataclass

from rich.cells import cell_len

GREY0 = "#1A1A1A"
GREY1 = "#333333"
GREY2 = "#555555"
GREY3 = "#777777"
GREY4 = "#999999"
GREY5 = "#AAAAAA"
GREY6 = "#C2C2C2"
WHITE = "#FFFFFF"

PRIMARY = "62"
PRIMARY_ALT = "57"
INACTIVE = "243"
EMPTY_COLOR = "#3B4252"

_ANSI = re.compile(r"\x1b\[[0-9;]*m")
_RESET = "\x1b[0m"
_BORDERS = {
    "rounded": ("╭", "╮", "╰", "╯", "─", "│"),
    "normal": ("┌", "┐", "└", "┘", "─", "│"),
}
_ALIGNS = ("left", "center", "right")


def _color_code(color: str, layer: int) -> str:
    if color.startswith("#"):
        digits = color[1:]
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        try:
            red, green, blue = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
        except ValueError:
            raise ValueError(f"invalid colour {color!r}") from None
        if len(digits) != 6:
            raise ValueError(f"invalid colour {color!r}")
        return f"{layer};2;{red};{green};{blue}"
    if color.isdigit() and int(color) < 256:
        return f"{layer};5;{int(color)}"
    raise ValueError(f"invalid colour {color!r}")


def _paint(text: str, codes: list[str]) -> str:
    if not codes or not text:
        return text
    return f"\x1b[{';'.join(codes)}m{text}{_RESET}"


def _width(line: str) -> int:
    return cell_len(_ANSI.sub("", line))


def _align(line: str, width: int, align: str) -> str:
    gap = width - _width(line)
    if gap <= 0:
        return line
    if align == "right":
        return " " * gap + line
    if align == "center":
        left = gap // 2
        return " " * left + line + " " * (gap - left)
    return line + " " * gap


@dataclass(frozen=True)
class Style:
    """How a block of text is coloured, aligned, padded and framed.

    ``width`` includes the padding but not the border or margins.
    Sides are given as (top, right, bottom, left).
    """

    foreground: str | None = None
    background: str | None = None
    bold: bool = False
    align: str = "left"
    width: int | None = None
    padding: tuple[int, int, int, int] = (0, 0, 0, 0)
    margin: tuple[int, int, int, int] = (0, 0, 0, 0)
    border: str | None = None
    border_foreground: str | None = None
    border_sides: tuple[bool, bool, bool, bool] = (True, True, True, True)

    def __post_init__(self) -> None:
        if self.align not in _ALIGNS:
            raise ValueError(f"invalid alignment {self.align!r}")
        if self.border is not None and self.border not in _BORDERS:
            raise ValueError(f"invalid border {self.border!r}")
        for color in (self.foreground, self.background, self.border_foreground):
            if color is not None:
                _color_code(color, 38)

    def _text_codes(self) -> list[str]:
        codes = []
        if self.bold:
            codes.append("1")
        if self.foreground is not None:
            codes.append(_color_code(self.foreground, 38))
        codes.extend(self._background_codes())
        return codes

    def _background_codes(self) -> list[str]:
        if self.background is None:
            return []
        return [_color_code(self.background, 48)]


_HEADER = Style(
    foreground=WHITE,
    background=EMPTY_COLOR,
    bold=True,
    align="center",
    padding=(0, 2, 0, 2),
)
_ACTIVE_HEADER = Style(
    foreground="229",
    background=PRIMARY_ALT,
    bold=True,
    align="center",
    padding=(0, 2, 0, 2),
)
_BORDER_CONTAINER = Style(border="rounded", border_foreground=PRIMARY)


def header() -> Style:
    """Style of an inactive tab header."""
    return _HEADER


def active_header() -> Style:
    """Style of the selected tab header."""
    return _ACTIVE_HEADER


def border_container() -> Style:
    """Rounded frame in the primary colour."""
    return _BORDER_CONTAINER


def render(text: str, style: Style) -> str:
    """Lay out ``text`` with ``style`` and return the resulting block."""
    lines = str(text).split("\n")
    pad_top, pad_right, pad_bottom, pad_left = style.padding
    content = max(_width(line) for line in lines)
    if style.width is not None:
        content = max(content, style.width - pad_left - pad_right)

    codes = style._text_codes()
    background = style._background_codes()
    body = [
        _paint(" " * pad_left, background)
        + _paint(_align(line, content, style.align), codes)
        + _paint(" " * pad_right, background)
        for line in lines
    ]
    inner = content + pad_left + pad_right
    blank = _paint(" " * inner, background)
    body = [blank] * pad_top + body + [blank] * pad_bottom

    if style.border is not None:
        top_left, top_right, bottom_left, bottom_right, horizontal, vertical = (
            _BORDERS[style.border]
        )
        top, right, bottom, left = style.border_sides
        border_codes = (
            [_color_code(style.border_foreground, 38)]
            if style.border_foreground is not None
            else []
        )
        side = _paint(vertical, border_codes)
        body = [
            (side if left else "") + line + (side if right else "") for line in body
        ]

        def edge(left_corner: str, right_corner: str) -> str:
            return _paint(
                (left_corner if left else "")
                + horizontal * inner
                + (right_corner if right else ""),
                border_codes,
            )

        if top:
            body.insert(0, edge(top_left, top_right))
        if bottom:
            body.append(edge(bottom_left, bottom_right))

    margin_top, margin_right, margin_bottom, margin_left = style.margin
    if any(style.margin):
        full = max(_width(line) for line in body) + margin_left + margin_right
        body = [" " * margin_left + line + " " * margin_right for line in body]
        body = [" " * full] * margin_top + body + [" " * full] * margin_bottom
    return "\n".join(body)


def join_horizontal(position: str, *blocks: str) -> str:
    """Place blocks side by side; ``position`` is top, center or bottom."""
    if position not in ("top", "center", "bottom"):
        raise ValueError(f"invalid position {position!r}")
    split = [block.split("\n") for block in blocks]
    if not split:
        return ""
    height = max(len(lines) for lines in split)
    columns = []
    for lines in split:
        width = max(_width(line) for line in lines)
        extra = height - len(lines)
        if position == "top":
            above = 0
        elif position == "bottom":
            above = extra
        else:
            above = extra // 2
        padded = [""] * above + lines + [""] * (extra - above)
        columns.append([_align(line, width, "left") for line in padded])
    return "\n".join("".join(row) for row in zip(*columns))


def join_vertical(position: str, *blocks: str) -> str:
    """Stack blocks; ``position`` is left, center or right."""
    if position not in _ALIGNS:
        raise ValueError(f"invalid position {position!r}")
    lines = [line for block in blocks for line in block.split("\n")]
    if not lines:
        return ""
    width = max(_width(line) for line in lines)
    return "\n".join(_align(line, width, position) for line in lines)