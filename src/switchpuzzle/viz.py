import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle

from .board import SIZE, Board, Coord
from .moves import apply_cross


def _outline(ax, coord, color, linewidth=2):
    ax.add_patch(
        Rectangle(
            (coord.x - 0.5, coord.y - 0.5),
            1,
            1,
            edgecolor=color,
            facecolor="none",
            linewidth=linewidth,
        )
    )


def _grid_axes(ax, title=None):
    ax.set_xticks(range(SIZE))
    ax.set_yticks(range(SIZE))
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    if title:
        ax.set_title(title)


def show_board(
    board: Board,
    hint: Coord | None = None,
    ax=None,
    hint_color="green",
    cmap="Greys",
    show_result=False,
):
    """
    Draw the board with lit cells dark. A hint cell gets an outline.

    With ``show_result`` and a hint, a second panel shows the board after
    the hinted cross move. ``ax`` is then a pair of axes, one per panel.
    """
    panels = [(board, "Board")]
    if show_result and hint is not None:
        panels.append((apply_cross(board, *hint), "After hint"))

    if ax is None:
        _, axes = plt.subplots(
            1, len(panels), figsize=(3.5 * len(panels), 3.5), squeeze=False
        )
        axes = list(axes[0])
    else:
        axes = list(np.atleast_1d(ax))
        if len(axes) != len(panels):
            raise ValueError(
                f"Need {len(panels)} axes for this plot, got {len(axes)}"
            )

    for ax_i, (b, title) in zip(axes, panels):
        ax_i.imshow(b.state.astype(float), cmap=cmap, vmin=0.0, vmax=1.0)
        if hint is not None and b is board:
            _outline(ax_i, hint, hint_color, linewidth=4)
        _grid_axes(ax_i, title)
    return axes[0] if len(axes) == 1 else axes


def show_distance_histogram(oracle, ax=None, color="tab:blue"):
    """Number of states per optimal solution length."""
    counts = oracle.distance_histogram()
    if ax is None:
        _, ax = plt.subplots(figsize=(5, 3.5))
    ax.bar(np.arange(len(counts)), counts, color=color)
    ax.set_xlabel("moves to solve")
    ax.set_ylabel("states")
    ax.set_xticks(range(len(counts)))
    ax.set_title(f"{int(counts.sum())} states, max {oracle.max_distance} moves")
    return ax
