class InvalidInput(ValueError):
    """
    Playback or rendering parameters outside their domain
    (empty time series, non-positive duration, ...)
    """


class InvalidGrid(ValueError):
    """
    Malformed snapshot dimensions (zero extent, all axes
    collapsed, wrong number of axes, ...)
    """
