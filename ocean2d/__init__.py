from .errors import InvalidInput, InvalidGrid
from .config import SIMULATION_CONFIG, ANIMATION_CONFIG, PLOT_CONFIG, FrameConfig
from .sampler import select_frame, render_range, slice_for_2d
from .field import FieldTimeSeries, read_series
from .diagnostics import extrema, horizontal_average, nusselt_number
from .logging_config import setup_logging

# ocean2d.simulation needs dedalus (pip install ocean2d[simulation])
# and is imported explicitly.

__version__ = "0.1.0"
