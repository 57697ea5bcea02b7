import logging

import numpy as np
import matplotlib.pyplot as plt

from ..config import PLOT_CONFIG
from ..errors import InvalidInput

logger = logging.getLogger(__name__)

LABELS = {
    "u": "Horizontal velocity",
    "v": "Transverse velocity",
    "w": "Vertical velocity",
    "T": "Temperature",
    "S": "Salinity",
}


def field_label(name):
    return LABELS.get(name, name)


def render_heatmap(
    grid2d,
    vmin=None,
    vmax=None,
    ax=None,
    cmap=None,
    ylim_factor=None,
    colorbar=False,
):
    """
    Draw a 2D grid (rows = vertical axis) as colour-mapped image
    with aspect ratio 1.

    Values outside [vmin, vmax] are drawn in the end colours
    of the colormap. The vertical range is (0, ylim_factor*Nrows),
    which leaves room above the field for annotations.
    cmap and ylim_factor default to PLOT_CONFIG.

    Output
        matplotlib.image.AxesImage
    """
    if vmin is not None and vmax is not None and vmin > vmax:
        raise InvalidInput(
            "Colour range inverted: vmin={:} > vmax={:}".format(vmin, vmax)
        )
    grid2d = np.asarray(grid2d)
    if grid2d.ndim > 2:
        raise InvalidInput(
            "Heatmap needs a 2D grid, got shape {:}".format(grid2d.shape)
        )
    if cmap is None:
        cmap = PLOT_CONFIG["cmap"]
    if ylim_factor is None:
        ylim_factor = PLOT_CONFIG["ylim_factor"]
    # 1D views (two collapsed axes) are drawn as a single row
    grid2d = np.atleast_2d(grid2d)
    nrows, ncols = grid2d.shape

    if ax is None:
        ax = plt.gca()
    im = ax.imshow(
        grid2d,
        origin="lower",
        extent=(0, ncols, 0, nrows),
        aspect=1,
        cmap=cmap,
        vmin=vmin,
        vmax=vmax,
        interpolation="nearest",
    )
    ax.set_xlim(0, ncols)
    ax.set_ylim(0, ylim_factor * nrows)
    if colorbar:
        ax.figure.colorbar(im, ax=ax, orientation="horizontal", shrink=0.8)
    return im


def save_heatmap(grid2d, vmin, vmax, filename, dpi=120, **kwargs):
    """Render grid2d into a new figure and write it to filename"""
    fig, ax = plt.subplots()
    render_heatmap(grid2d, vmin, vmax, ax=ax, **kwargs)
    logger.info("Write %s ...", filename)
    fig.savefig(filename, dpi=dpi)
    plt.close(fig)
    return filename


def plot_snapshot(
    series, i, ax=None, cmap=None, title_size=None, annotation_size=None
):
    """
    Annotated heatmap of snapshot i of a series:
    name and timestep above the field, max and min below it.
    """
    if title_size is None:
        title_size = PLOT_CONFIG["title_size"]
    if annotation_size is None:
        annotation_size = PLOT_CONFIG["annotation_size"]
    if ax is None:
        ax = plt.gca()
    grid = series.interior(i)
    nrows, ncols = np.atleast_2d(grid).shape

    im = render_heatmap(grid, ax=ax, cmap=cmap)
    ax.text(
        0,
        1.45 * nrows,
        "{:} at timestep {:d}".format(field_label(series.name), i),
        fontsize=title_size,
        ha="left",
        va="top",
    )
    ax.text(
        0,
        1.15 * nrows,
        "Max = {:.3g}".format(np.max(series[i])),
        fontsize=annotation_size,
        ha="left",
    )
    ax.text(
        0.4 * ncols,
        1.15 * nrows,
        "Min = {:.3g}".format(np.min(series[i])),
        fontsize=annotation_size,
        ha="left",
    )
    ax.set_ylabel(series.display_axes()[-1])
    ax.axis("off")
    return im


def plot_snapshots(series, indices=None, figsize=None, **kwargs):
    """
    Annotated snapshots stacked vertically, one panel per index
    (default PLOT_CONFIG["snapshot_indices"])
    """
    if indices is None:
        indices = PLOT_CONFIG["snapshot_indices"]
    if figsize is None:
        figsize = PLOT_CONFIG["figsize"]
    indices = [int(i) for i in indices]
    for i in indices:
        if not -len(series) <= i < len(series):
            raise IndexError(
                "Snapshot {:d} out of range for {:d} snapshots".format(i, len(series))
            )
    fig, axs = plt.subplots(len(indices), 1, figsize=figsize, squeeze=False)
    for ax, i in zip(axs[:, 0], indices):
        plot_snapshot(series, i, ax=ax, **kwargs)
    return fig
