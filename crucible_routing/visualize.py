"""Path rendering helpers: arrows over the digit grid, or a matplotlib heat map."""

from __future__ import annotations

from typing import Dict, List, Sequence

import matplotlib.pyplot as plt

from .Objects import Coord, Direction, Grid

HIGHLIGHT_START = "\x1b[93m"
HIGHLIGHT_END = "\x1b[0m"


def _step_arrows(path: Sequence[Coord]) -> Dict[Coord, str]:
    arrows: Dict[Coord, str] = {}
    for a, b in zip(path, path[1:]):
        arrows[a] = Direction.between(a, b).arrow
    return arrows


def render_arrows(grid: Grid, path: Sequence[Coord], highlight: bool = False) -> str:
    """Draw the grid as text, replacing each path cell but the last with the arrow leaving it.

    With `highlight`, every path cell is wrapped in ANSI bright yellow.
    """
    arrows = _step_arrows(path)
    on_path = set(path)
    lines: List[str] = []
    for y in range(grid.height):
        chars: List[str] = []
        for x in range(grid.width):
            ch = arrows.get((x, y), str(grid.rows[y][x]))
            if highlight and (x, y) in on_path:
                ch = f"{HIGHLIGHT_START}{ch}{HIGHLIGHT_END}"
            chars.append(ch)
        lines.append("".join(chars))
    return "\n".join(lines)


def visualize(grid: Grid, path: Sequence[Coord] | None = None,
              show: bool = True, save_path: str | None = None, title: str | None = None) -> None:
    """Render cell costs as a heat map with the path drawn on top.

    Args:
        grid: Grid of costs.
        path: sequence of (x, y) coordinates, start first.
        show: display via matplotlib.
        save_path: optional filepath to save PNG.
        title: optional axes title.
    """
    fig, ax = plt.subplots(figsize=(max(3, grid.width / 2), max(3, grid.height / 2)))
    ax.imshow([list(row) for row in grid.rows], cmap="YlOrRd", origin="upper",
              vmin=0, vmax=max(max(row) for row in grid.rows) or 1)

    if grid.width * grid.height <= 900:
        for x, y in grid.coords():
            ax.text(x, y, str(grid.rows[y][x]), ha='center', va='center', fontsize=7, color='black')

    if path and len(path) > 1:
        xs = [x for x, _ in path]
        ys = [y for _, y in path]
        ax.plot(xs, ys, '-', color="#377eb8", linewidth=2)
        ax.plot(xs[0], ys[0], 'go', markersize=6)
        ax.plot(xs[-1], ys[-1], 'ko', markersize=6)

    ax.set_xticks(range(grid.width))
    ax.set_yticks(range(grid.height))
    ax.set_aspect('equal')
    if title:
        ax.set_title(title)

    if save_path:
        plt.savefig(save_path, bbox_inches='tight', dpi=150)
    if show:
        plt.show()
    else:
        plt.close(fig)
