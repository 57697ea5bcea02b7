import glob
import logging
import os
import re

import h5py
import numpy as np

from .errors import InvalidInput, InvalidGrid
from .sampler import select_frame, render_range, slice_for_2d

logger = logging.getLogger(__name__)

AXES = ("x", "y", "z")


class FieldTimeSeries:
    """
    Read-only series of 3D snapshots of a single field

    Input
        name: str
            Name of the field (task name in the output file)
        times: array_like (Nt)
            Strictly increasing simulation times
        data: ndarray (Nt, Nx, Ny, Nz) or (Nt, Nx, Nz)
            Snapshots. 2D data is stored with a unit y axis.
        x, y, z: array_like, optional
            Grid coordinates along each axis

    Example
    >>>>>>>>>>>>>>>>>>>>>>>>>>>>>>
    from ocean2d.field import FieldTimeSeries
    uF = FieldTimeSeries.read("conv4", "u")

    print(uF.shape, uF.times[-1])
    i = uF.nearest(2.5, duration=30)
    grid = uF.interior(i)   # (Nz, Nx)
    >>>>>>>>>>>>>>>>>>>>>>>>>>>>>>
    """

    def __init__(self, name, times, data, x=None, y=None, z=None):
        times = np.array(times, dtype=float).ravel()
        data = np.array(data, dtype=float)

        if data.ndim == 3:
            data = data[:, :, None, :]
        if data.ndim != 4:
            raise InvalidGrid(
                "Snapshots must be 2D or 3D, got data of shape {:}".format(data.shape)
            )
        if times.size == 0:
            raise InvalidInput("Time series {:} is empty.".format(name))
        if times.size != data.shape[0]:
            raise InvalidGrid(
                "{:} times but {:} snapshots in {:}".format(
                    times.size, data.shape[0], name
                )
            )
        if np.any(np.diff(times) <= 0):
            raise InvalidInput("Times of {:} are not strictly increasing.".format(name))

        self.name = name
        self.range = render_range(data.shape[1:])

        times.setflags(write=False)
        data.setflags(write=False)
        self.times = times
        self.data = data

        self.coords = {}
        for axis, n, c in zip(AXES, data.shape[1:], (x, y, z)):
            if c is None:
                c = np.arange(n, dtype=float)
            c = np.array(c, dtype=float).ravel()
            if c.size != n:
                raise InvalidGrid(
                    "Coordinate {:} has {:} points, grid has {:}".format(
                        axis, c.size, n
                    )
                )
            c.setflags(write=False)
            self.coords[axis] = c

    def __len__(self):
        return self.data.shape[0]

    def __getitem__(self, i):
        return self.data[i]

    def __repr__(self):
        return "FieldTimeSeries({:}, Nt={:d}, grid={:})".format(
            self.name, len(self), self.grid_shape
        )

    @property
    def shape(self):
        return self.data.shape

    @property
    def grid_shape(self):
        return self.data.shape[1:]

    @property
    def Nx(self):
        return self.data.shape[1]

    @property
    def Ny(self):
        return self.data.shape[2]

    @property
    def Nz(self):
        return self.data.shape[3]

    @property
    def x(self):
        return self.coords["x"]

    @property
    def y(self):
        return self.coords["y"]

    @property
    def z(self):
        return self.coords["z"]

    def minimum(self):
        return float(np.nanmin(self.data))

    def maximum(self):
        return float(np.nanmax(self.data))

    def nearest(self, playback_time, duration):
        """Snapshot index closest to a playback moment"""
        return select_frame(self.times, playback_time, duration)

    def interior(self, i):
        """2D view (vertical axis first) of snapshot i"""
        return slice_for_2d(self.data[i], self.grid_shape)

    def display_axes(self):
        """
        Names of the (horizontal, vertical) display axes, i.e.
        the non-collapsed axes in storage order.
        """
        return tuple(a for a, r in zip(AXES, self.range) if isinstance(r, slice))

    def subset(self, indices):
        """New series holding only the given snapshot indices"""
        indices = np.atleast_1d(indices)
        return FieldTimeSeries(
            self.name, self.times[indices], self.data[indices], **self.coords
        )

    # -- Read Write
    def write(self, filename, mode="w"):
        """
        Write series in the layout of dedalus output files:
            tasks/<name>        (Nt, Nx, Ny, Nz)
            scales/sim_time     (Nt)
            scales/<axis>_hash_0
        """
        logger.info("Write %s ...", filename)
        with h5py.File(filename, mode) as hf:
            write_single_hdf5(hf, "tasks/" + self.name, self.data)
            write_single_hdf5(hf, "scales/sim_time", self.times)
            write_single_hdf5(hf, "scales/write_number", np.arange(1, len(self) + 1))
            for axis, c in self.coords.items():
                write_single_hdf5(hf, "scales/{:s}_hash_0".format(axis), c)

    @classmethod
    def read(cls, path, name):
        """
        Read task name from a single .h5 file or from a directory
        of dedalus set files (<handler>_s1.h5, <handler>_s2.h5, ...)
        """
        files = output_files(path)
        logger.info("Read %s from %d file(s) in %s ...", name, len(files), path)

        times, data = [], []
        coords = {}
        for filename in files:
            with h5py.File(filename, "r") as hf:
                tasks = hf.get("tasks")
                if tasks is None or name not in tasks:
                    available = list(tasks.keys()) if tasks is not None else []
                    raise KeyError(
                        "Task {:} not found in {:}. Available tasks: {:}".format(
                            name, filename, available
                        )
                    )
                data.append(np.array(tasks[name]))
                times.append(np.array(hf["scales/sim_time"]))
                if not coords:
                    coords = read_coords(hf, data[-1].ndim - 1)

        return cls(name, np.concatenate(times), np.concatenate(data, axis=0), **coords)


def read_series(path, names):
    """Dict of FieldTimeSeries for several tasks of the same output"""
    return {n: FieldTimeSeries.read(path, n) for n in names}


def output_files(path):
    """
    Ordered list of output files. Set files are sorted by
    their set number, not lexicographically.
    """
    if os.path.isfile(path):
        return [path]
    if not os.path.isdir(path):
        if os.path.isfile(path + ".h5"):
            return [path + ".h5"]
        raise FileNotFoundError("No output found at {:}".format(path))

    files = glob.glob(os.path.join(path, "*.h5"))
    if not files:
        raise FileNotFoundError("No .h5 files found in {:}".format(path))
    return sorted(files, key=set_number)


def set_number(filename):
    match = re.search(r"_s(\d+)\.h5$", os.path.basename(filename))
    if match is None:
        return 0
    return int(match.group(1))


def read_coords(hf, ndim):
    """Grid coordinates stored as scales/<axis>_hash_*"""
    coords = {}
    scales = hf.get("scales")
    if scales is None:
        return coords
    axes = AXES if ndim == 3 else ("x", "z")
    for axis in axes:
        keys = [k for k in scales.keys() if k.startswith(axis + "_hash_")]
        if keys:
            coords[axis] = np.array(scales[keys[0]])
    return coords


def write_single_hdf5(hf, name, data):
    data = np.asarray(data)
    if name in hf and hf[name].shape != data.shape:
        # Datasets can't change shape, replace it
        del hf[name]
    if name not in hf:
        hf.create_dataset(name, data=data)
    else:
        hf[name][...] = data
