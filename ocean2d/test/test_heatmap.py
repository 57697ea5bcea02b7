import os
import tempfile
import numpy as np
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from ..plot.heatmap import *
from ..config import PLOT_CONFIG
from ..field import FieldTimeSeries
from ..errors import InvalidInput
import unittest

NX, NZ = 32, 8  # Grid size


class TestHeatmap(unittest.TestCase):
    def setUp(self):
        self.fig, self.ax = plt.subplots()
        self.grid = np.linspace(0, 1, NX * NZ).reshape(NZ, NX)

    def tearDown(self):
        plt.close("all")

    @classmethod
    def setUpClass(cls):
        print("------------------------")
        print(" Test: render_heatmap  ")
        print("------------------------")

    def test_clim(self):
        im = render_heatmap(self.grid, 0.2, 0.8, ax=self.ax)
        assert im.get_clim() == (0.2, 0.8)

    def test_clamp_above_range(self):
        grid = np.array([[0.0, 0.5], [1.0, 1.5]])
        im = render_heatmap(grid, 0.0, 1.0, ax=self.ax)
        assert np.allclose(im.to_rgba(1.5), im.to_rgba(1.0))
        assert np.allclose(im.to_rgba(-0.5), im.to_rgba(0.0))

    def test_does_not_mutate(self):
        grid = self.grid.copy()
        render_heatmap(grid, 0.0, 0.5, ax=self.ax)
        assert np.array_equal(grid, self.grid)

    def test_axes_range(self):
        render_heatmap(self.grid, 0.0, 1.0, ax=self.ax, ylim_factor=1.5)
        assert np.allclose(self.ax.get_ylim(), (0, 1.5 * NZ))
        assert np.allclose(self.ax.get_xlim(), (0, NX))

    def test_default_range_and_cmap(self):
        im = render_heatmap(self.grid, 0.0, 1.0, ax=self.ax)
        assert np.allclose(self.ax.get_ylim(), (0, PLOT_CONFIG["ylim_factor"] * NZ))
        assert im.get_cmap().name == PLOT_CONFIG["cmap"]

    def test_one_dimensional(self):
        im = render_heatmap(np.arange(5.0), 0.0, 4.0, ax=self.ax)
        assert im.get_array().shape == (1, 5)

    def test_inverted_range(self):
        with self.assertRaises(InvalidInput):
            render_heatmap(self.grid, 1.0, 0.0, ax=self.ax)

    def test_three_dimensional(self):
        with self.assertRaises(InvalidInput):
            render_heatmap(np.zeros((2, 2, 2)), 0.0, 1.0, ax=self.ax)

    def test_save(self):
        with tempfile.TemporaryDirectory() as tmp:
            fname = os.path.join(tmp, "T.png")
            save_heatmap(self.grid, 0.0, 1.0, fname)
            assert os.path.getsize(fname) > 0


class TestSnapshotPanels(unittest.TestCase):
    def setUp(self):
        times = np.arange(4, dtype=float)
        data = np.zeros((4, NX, 1, NZ))
        data[:, 0, 0, 0] = -2.0 * (times + 1)
        data[:, -1, 0, -1] = 3.0 * (times + 1)
        self.F = FieldTimeSeries("u", times, data)

    def tearDown(self):
        plt.close("all")

    @classmethod
    def setUpClass(cls):
        print("------------------------")
        print(" Test: plot_snapshot  ")
        print("------------------------")

    def test_annotations(self):
        fig, ax = plt.subplots()
        plot_snapshot(self.F, 1, ax=ax)
        texts = [t.get_text() for t in ax.texts]
        assert "Horizontal velocity at timestep 1" in texts
        assert "Max = 6" in texts
        assert "Min = -4" in texts
        assert not ax.axison

    def test_stacked(self):
        fig = plot_snapshots(self.F, (0, 2, 3))
        assert len(fig.axes) == 3
        texts = [t.get_text() for t in fig.axes[2].texts]
        assert "Max = 12" in texts

    def test_default_layout(self):
        data = np.zeros((501, NX, 1, NZ))
        F = FieldTimeSeries("u", np.arange(501, dtype=float), data)
        fig = plot_snapshots(F)
        assert len(fig.axes) == len(PLOT_CONFIG["snapshot_indices"])
        assert np.allclose(fig.get_size_inches(), PLOT_CONFIG["figsize"])
        title = fig.axes[0].texts[0]
        assert title.get_text() == "Horizontal velocity at timestep 50"
        assert title.get_fontsize() == PLOT_CONFIG["title_size"]

    def test_out_of_range(self):
        with self.assertRaises(IndexError):
            plot_snapshots(self.F, (0, 50))

    def test_label(self):
        assert field_label("T") == "Temperature"
        assert field_label("b") == "b"


class TestInitPlot(unittest.TestCase):
    def tearDown(self):
        plt.rcdefaults()

    def test_rc(self):
        from ..plot.initplot import initplot

        config = initplot()
        assert config.cmap == PLOT_CONFIG["cmap"]
        assert plt.rcParams["image.origin"] == "lower"
        assert plt.rcParams["image.cmap"] == PLOT_CONFIG["cmap"]
        assert tuple(plt.rcParams["figure.figsize"]) == PLOT_CONFIG["figsize"]

    def test_cmap(self):
        from ..plot.initplot import initplot

        initplot(cmap="magma")
        assert plt.rcParams["image.cmap"] == "magma"
