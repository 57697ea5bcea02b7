import logging
import os

import numpy as np
import matplotlib.pyplot as plt
from matplotlib import animation

from ..errors import InvalidInput
from .heatmap import render_heatmap, field_label

logger = logging.getLogger(__name__)

WRITERS = {
    ".mp4": "ffmpeg",
    ".mov": "ffmpeg",
    ".avi": "ffmpeg",
    ".gif": "pillow",
}


def frame_times(frame_config):
    """Playback times k/fps of all frames"""
    return np.arange(frame_config.nframes) / frame_config.fps


def infer_writer(filename):
    ext = os.path.splitext(filename)[1].lower()
    if ext not in WRITERS:
        raise InvalidInput(
            "Can't infer movie writer for {:}. Known extensions: {:}".format(
                filename, sorted(WRITERS)
            )
        )
    return WRITERS[ext]


def heatmap_at_time(series, playback_time, frame_config, ax=None, image=None, **kwargs):
    """
    Heatmap of the snapshot closest to playback_time.

    If image is given, its data is replaced instead of
    drawing a new image.
    """
    i = series.nearest(playback_time, frame_config.duration)
    grid = series.interior(i)
    if image is not None:
        image.set_data(np.atleast_2d(grid))
        return image
    return render_heatmap(grid, frame_config.fmin, frame_config.fmax, ax=ax, **kwargs)


def frame_title(series, i):
    return "{:} | t = {:.1f}".format(field_label(series.name), series.times[i])


def animate_heatmap(series, frame_config, fig=None, **kwargs):
    """
    Animation of a series, one frame per 1/fps playback
    seconds over frame_config.duration.

    Output
        matplotlib.animation.FuncAnimation
    """
    if fig is None:
        fig = plt.figure()
    ax = fig.gca()
    times = frame_times(frame_config)

    image = heatmap_at_time(series, times[0], frame_config, ax=ax, **kwargs)
    title = ax.set_title(frame_title(series, series.nearest(times[0], frame_config.duration)))
    ax.set_xticks([])
    ax.set_yticks([])

    def update(t):
        heatmap_at_time(series, t, frame_config, image=image)
        title.set_text(frame_title(series, series.nearest(t, frame_config.duration)))
        return image, title

    return animation.FuncAnimation(
        fig, update, frames=times, interval=1000.0 / frame_config.fps, blit=False
    )


def write_movie(series, filename, frame_config, writer=None, dpi=100, **kwargs):
    """
    Render all frames and write them to filename. The writer
    is inferred from the extension (.mp4 -> ffmpeg, .gif -> pillow)
    """
    if writer is None:
        writer = infer_writer(filename)
    fig = plt.figure()
    anim = animate_heatmap(series, frame_config, fig=fig, **kwargs)
    logger.info(
        "Write %s (%d frames, %d fps, writer=%s) ...",
        filename,
        frame_config.nframes,
        frame_config.fps,
        writer,
    )
    try:
        anim.save(filename, writer=writer, fps=frame_config.fps, dpi=dpi)
    finally:
        plt.close(fig)
    return filename
