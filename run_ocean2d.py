import logging

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from ocean2d import FrameConfig, PLOT_CONFIG, setup_logging, slice_for_2d
from ocean2d.plot import initplot, save_heatmap, plot_snapshots, write_movie
from ocean2d.simulation import ConvectionSimulation

setup_logging(logging.INFO, log_file="ocean2d.log")
initplot()

# Convection run settings
sim_settings = {
    "shape": (256, 32),
    "extent": (256.0, 32.0),
    "T_top": 1.0,
    "T_bottom": 20.0,
    "nu": 0.05,
    "kappa": 0.01,
    "thermal_expansion": 0.01,
    "haline_contraction": 0.0,
    "dt": 0.01,
    "stop_time": 1800.0,
    "output_interval": 1.0,
    "velocity_output": "conv4",
    "tracer_output": "conv4T",
}

sim = ConvectionSimulation(**sim_settings)
sim.run()

# Final state
save_heatmap(slice_for_2d(sim.snapshot("T")), None, None, "T_final.png")
save_heatmap(slice_for_2d(sim.snapshot("u")), None, None, "u_final.png")

# Run for additional 10 time units
sim.extend(10.0)

# Snapshots of the horizontal velocity
uF = sim.read_output("u")
fig = plot_snapshots(uF, PLOT_CONFIG["snapshot_indices"])
fig.savefig("u_snapshots.png")
plt.close(fig)

# Movie
frame_config = FrameConfig.from_series(uF)
write_movie(uF, "uMovie.mp4", frame_config)
