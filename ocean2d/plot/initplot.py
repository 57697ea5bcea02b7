import logging

import matplotlib.pyplot as plt

from ..config import PLOT_CONFIG

logger = logging.getLogger(__name__)


def initplot(**kwargs):
    return InitPlot(**kwargs)


def update_rc(params):
    """Update rc params

    Args:
        params (dict): Dictionary containing new settings.
    """
    plt.rcParams.update(params)


class InitPlot:
    """Figure defaults for the heatmaps: fonts, colormap and image origin"""

    def __init__(self, cmap=None, size=11):
        self.cmap = PLOT_CONFIG["cmap"] if cmap is None else cmap
        self.plot = self.default_config(size)

        logger.debug("update rc params to default ...")
        update_rc(self.plot)

    def default_config(self, size=11):
        """Define default plot settings

        Args:
            size (int): Fontsize
        """
        config = {
            "figure.figsize": PLOT_CONFIG["figsize"],
            "axes.labelsize": size,
            "axes.titlesize": size,
            "axes.titlepad": 5,
            "axes.labelpad": 6,
            "axes.grid": False,
            "xtick.labelsize": size * 0.9,
            "ytick.labelsize": size * 0.9,
            "font.family": "serif",
            "savefig.bbox": "tight",
            "image.cmap": self.cmap,
            "image.origin": "lower",
            "image.aspect": 1,
        }
        return config
