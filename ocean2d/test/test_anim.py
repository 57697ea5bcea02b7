import os
import tempfile
import numpy as np
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from ..plot.anim import *
from ..config import FrameConfig
from ..field import FieldTimeSeries
from ..errors import InvalidInput
import unittest

NT, NX, NZ = 11, 12, 4  # Series size


class TestAnimation(unittest.TestCase):
    def setUp(self):
        times = np.arange(NT, dtype=float)
        data = np.ones((NT, NX, 1, NZ)) * times[:, None, None, None]
        self.F = FieldTimeSeries("u", times, data)

    def tearDown(self):
        plt.close("all")

    @classmethod
    def setUpClass(cls):
        print("------------------------")
        print(" Test: Animation  ")
        print("------------------------")

    def test_frame_times(self):
        cfg = FrameConfig(0.0, 1.0, duration=2.0, fps=5)
        t = frame_times(cfg)
        assert len(t) == 10
        assert np.isclose(t[0], 0.0)
        assert np.isclose(t[-1], 1.8)

    def test_infer_writer(self):
        assert infer_writer("uMovie.mp4") == "ffmpeg"
        assert infer_writer("out/anim.GIF") == "pillow"
        with self.assertRaises(InvalidInput):
            infer_writer("uMovie.txt")

    def test_heatmap_at_time(self):
        # times 0..10 mapped on duration 5: playback 2.5 -> t = 5
        cfg = FrameConfig(0.0, 10.0, duration=5.0, fps=2)
        fig, ax = plt.subplots()
        im = heatmap_at_time(self.F, 2.5, cfg, ax=ax)
        assert np.allclose(im.get_array(), 5.0)
        assert im.get_clim() == (0.0, 10.0)

        # Update existing image in place
        im2 = heatmap_at_time(self.F, 5.0, cfg, image=im)
        assert im2 is im
        assert np.allclose(im.get_array(), 10.0)
        assert len(ax.images) == 1

    def test_animate(self):
        cfg = FrameConfig(0.0, 10.0, duration=1.0, fps=4)
        anim = animate_heatmap(self.F, cfg)
        assert anim is not None

    def test_write_gif(self):
        cfg = FrameConfig.from_series(self.F, scale=0.5, duration=1.0, fps=4)
        with tempfile.TemporaryDirectory() as tmp:
            fname = os.path.join(tmp, "uMovie.gif")
            write_movie(self.F, fname, cfg, dpi=40)
            assert os.path.getsize(fname) > 0
