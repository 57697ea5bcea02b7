from .initplot import initplot, update_rc
from .heatmap import render_heatmap, save_heatmap, plot_snapshot, plot_snapshots
from .anim import heatmap_at_time, frame_times, animate_heatmap, write_movie
