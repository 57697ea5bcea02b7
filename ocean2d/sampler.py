import numpy as np
from .errors import InvalidInput, InvalidGrid


def select_frame(times, requested_fraction, total_duration):
    """
    Index of the recorded snapshot closest to a playback moment

    The playback moment is mapped linearly onto the recorded
    times, such that requested_fraction = total_duration
    corresponds to the last recorded time.

    Input
        times: array_like
            Ascending recorded sample times
        requested_fraction: float
            Elapsed playback time
        total_duration: float
            Total length of the playback

    Output
        int
            Index i minimizing |times[i] - target|. On ties
            the first such index is returned.

    Example
    >>>>>>>>>>>>>>>>>>>>>>>>>>>>>>
    times = [0, 1, 2, 3, 4, 5]
    select_frame(times, 2.5, 5)  # target 2.5 -> 2
    >>>>>>>>>>>>>>>>>>>>>>>>>>>>>>
    """
    ts = np.asarray(times, dtype=float)
    if ts.size == 0:
        raise InvalidInput("Can't select a frame from an empty time series.")
    if total_duration <= 0:
        raise InvalidInput(
            "total_duration must be positive, got {:}".format(total_duration)
        )
    target = requested_fraction * ts[-1] / total_duration
    # argmin returns the first occurrence of the minimum
    return int(np.argmin(np.abs(ts - target)))


def render_range(dims):
    """
    Index range per axis used to view a 3D snapshot in 2D.

    Axes with extent 1 collapse to a single index, all other
    axes keep their full range.
    """
    dims = tuple(dims)
    if len(dims) != 3:
        raise InvalidGrid("Expected 3 axis extents, got {:}".format(dims))
    if any(n < 1 for n in dims):
        raise InvalidGrid("Zero extent in grid dimensions {:}".format(dims))
    if all(n == 1 for n in dims):
        raise InvalidGrid("All axes of {:} collapse, nothing to display".format(dims))
    return tuple(slice(None) if n > 1 else 0 for n in dims)


def slice_for_2d(snapshot, dims=None):
    """
    Flatten a 3D snapshot (Nx, Ny, Nz) to a 2D grid for display.

    The result is transposed relative to storage order, i.e.
    the vertical axis comes first:
    (256, 1, 32) -> (32, 256)
    """
    snapshot = np.asarray(snapshot)
    if snapshot.ndim != 3:
        raise InvalidGrid(
            "Expected a 3D snapshot, got shape {:}".format(snapshot.shape)
        )
    if dims is None:
        dims = snapshot.shape
    elif tuple(dims) != snapshot.shape:
        raise InvalidGrid(
            "Grid dimensions {:} do not match snapshot shape {:}".format(
                tuple(dims), snapshot.shape
            )
        )
    return snapshot[render_range(dims)].T
