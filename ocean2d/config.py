"""
Default parameters of the convection run, the snapshot
plots and the animation.

Classes take a copy of these dicts as CONFIG, update it with
their keyword arguments and expose every entry as attribute.
"""
import logging

from .errors import InvalidInput

logger = logging.getLogger(__name__)

SIMULATION_CONFIG = {
    "shape": (256, 32),  # grid points in x and z
    "extent": (256.0, 32.0),  # physical lengths in x and z
    "T_top": 1.0,
    "T_bottom": 20.0,
    "nu": 0.05,
    "kappa": 0.01,
    "thermal_expansion": 0.01,
    "haline_contraction": 0.0,
    "gravity": 9.80665,
    "perturbation": 0.1,
    "seed": None,
    "dt": 0.01,
    "stop_time": 1800.0,
    "output_interval": 1.0,
    "max_writes": 200,  # snapshots per output set file
    "output_dir": ".",
    "velocity_output": "conv4",
    "tracer_output": "conv4T",
    "timestepper": "RK222",
    "dealias": 3 / 2,
    "log_every": 100,
}

ANIMATION_CONFIG = {
    "duration": 30.0,
    "fps": 30,
    "clim_scale": 0.5,  # colour range is clim_scale*(min, max) of the series
}

PLOT_CONFIG = {
    "cmap": "viridis",
    "ylim_factor": 1.5,  # vertical range in units of Nz
    "snapshot_indices": (50, 100, 500),
    "figsize": (8, 9),
    "title_size": 12,
    "annotation_size": 8,
}


def io_config(config, title="Input Parameter"):
    logger.info("----------------------------")
    logger.info("%s:", title)
    for k, v in config.items():
        logger.info("%s : %s", k, v)
    logger.info("----------------------------")


class FrameConfig:
    """
    Fixed colour range and playback settings of an animation

    Input
        fmin, fmax: float
            Colour limits, values outside are clamped
        duration: float
            Length of the animation in playback seconds
        fps: int
            Frames per playback second
    """

    def __init__(self, fmin, fmax, duration=None, fps=None):
        if duration is None:
            duration = ANIMATION_CONFIG["duration"]
        if fps is None:
            fps = ANIMATION_CONFIG["fps"]
        if duration <= 0:
            raise InvalidInput("duration must be positive, got {:}".format(duration))
        if fps <= 0:
            raise InvalidInput("fps must be positive, got {:}".format(fps))
        if fmin > fmax:
            raise InvalidInput(
                "Colour range inverted: fmin={:} > fmax={:}".format(fmin, fmax)
            )
        self.fmin = float(fmin)
        self.fmax = float(fmax)
        self.duration = float(duration)
        self.fps = int(fps)

    @classmethod
    def from_series(cls, series, scale=None, duration=None, fps=None):
        """
        Colour range as scale*min and scale*max of the whole series
        """
        if scale is None:
            scale = ANIMATION_CONFIG["clim_scale"]
        return cls(
            scale * series.minimum(),
            scale * series.maximum(),
            duration=duration,
            fps=fps,
        )

    @property
    def nframes(self):
        return max(1, int(round(self.duration * self.fps)))

    def __eq__(self, other):
        if not isinstance(other, FrameConfig):
            return NotImplemented
        return (self.fmin, self.fmax, self.duration, self.fps) == (
            other.fmin,
            other.fmax,
            other.duration,
            other.fps,
        )

    def __repr__(self):
        return "FrameConfig(fmin={:g}, fmax={:g}, duration={:g}, fps={:d})".format(
            self.fmin, self.fmax, self.duration, self.fps
        )
