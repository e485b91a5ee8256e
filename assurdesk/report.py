"""Lay out a table as text cells and grid lines and write it to a PDF file."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from os import PathLike
from pathlib import Path
from typing import Union

from matplotlib.figure import Figure

from .db import Table, ValidationError


class Alignment(Enum):
    """How text sits inside its cell."""

    CENTER = "center"
    LEFT = "left"


@dataclass(frozen=True)
class DrawText:
    """Text placed in a cell whose top-left corner is at (x, y)."""

    x: int
    y: int
    width: int
    height: int
    align: Alignment
    text: str


@dataclass(frozen=True)
class DrawLine:
    """A straight line from (x1, y1) to (x2, y2)."""

    x1: int
    y1: int
    x2: int
    y2: int


@dataclass(frozen=True)
class LayoutStyle:
    """Cell size, font and row placement of an exported table.

    With ``header_overlaps_first_row`` data row ``r`` is drawn at ``r`` cell
    heights and row 0, which would sit under the headers, is left out;
    otherwise every row is drawn one cell height lower than its index.
    """

    cell_width: int = 100
    cell_height: int = 40
    font_family: str = "Arial"
    font_size: int = 7
    header_overlaps_first_row: bool = True
    require_rows: bool = False


LISTING_STYLE = LayoutStyle()
EMPLOYEE_STYLE = LayoutStyle(
    cell_width=100,
    cell_height=20,
    font_family="Arial",
    font_size=10,
    header_overlaps_first_row=False,
    require_rows=True,
)

NO_DATA_MESSAGE = "No data to export. Please ensure your table has data."


def table_layout(
    table: Table, style: LayoutStyle = LISTING_STYLE
) -> list[DrawText | DrawLine]:
    """The drawing operations that render ``table``, in drawing order."""
    if style.require_rows and len(table) == 0:
        raise ValidationError(NO_DATA_MESSAGE)
    width, height = style.cell_width, style.cell_height
    columns = len(table.headers)
    rows = len(table)
    operations: list[DrawText | DrawLine] = []

    for col, header in enumerate(table.headers):
        x = col * width
        operations.append(DrawText(x, 0, width, height, Alignment.CENTER, header))
        operations.append(DrawLine(x, 0, x, rows * height))

    for index, row in enumerate(table.rows):
        if style.header_overlaps_first_row:
            if index == 0:
                continue
            y = index * height
        else:
            y = (index + 1) * height
        for col in range(columns):
            cell = row[col] if col < len(row) else ""
            operations.append(
                DrawText(col * width, y, width, height, Alignment.LEFT, cell)
            )
        operations.append(DrawLine(0, y, columns * width, y))
    return operations


def _extent(operations: list[DrawText | DrawLine]) -> tuple[float, float]:
    right, bottom = 1.0, 1.0
    for op in operations:
        if isinstance(op, DrawText):
            right = max(right, op.x + op.width)
            bottom = max(bottom, op.y + op.height)
        else:
            right = max(right, op.x1, op.x2)
            bottom = max(bottom, op.y1, op.y2)
    return right, bottom


def export_pdf(
    table: Table,
    path: Union[str, "PathLike[str]"],
    style: LayoutStyle = LISTING_STYLE,
) -> Path:
    """Render ``table`` into a PDF file at ``path``; one unit is one point."""
    operations = table_layout(table, style)
    right, bottom = _extent(operations)
    figure = Figure(figsize=(right / 72, bottom / 72))
    axes = figure.add_axes((0, 0, 1, 1))
    axes.set_xlim(0, right)
    axes.set_ylim(bottom, 0)
    axes.set_axis_off()
    font = [style.font_family, "DejaVu Sans"]
    for op in operations:
        if isinstance(op, DrawLine):
            axes.plot([op.x1, op.x2], [op.y1, op.y2], color="black", linewidth=0.5)
        elif op.align is Alignment.CENTER:
            axes.text(
                op.x + op.width / 2,
                op.y + op.height / 2,
                op.text,
                ha="center",
                va="center",
                fontsize=style.font_size,
                fontfamily=font,
            )
        else:
            axes.text(
                op.x,
                op.y,
                op.text,
                ha="left",
                va="top",
                fontsize=style.font_size,
                fontfamily=font,
            )
    target = Path(path)
    figure.savefig(target, format="pdf")
    return target