import logging

import numpy as np
from scipy.integrate import trapezoid

from .config import SIMULATION_CONFIG

logger = logging.getLogger(__name__)


def extrema(series):
    """(min, max) over all snapshots of a series"""
    return series.minimum(), series.maximum()


def horizontal_average(snapshot):
    """
    Profile along z of a 3D snapshot (Nx, Ny, Nz),
    averaged over x and y
    """
    snapshot = np.asarray(snapshot)
    return snapshot.mean(axis=(0, 1))


def nusselt_number(T, w, z, kappa, delta_T, Lz=None):
    """
    Heat flux through the layer (volume) normalized
    by the conductive flux kappa*delta_T/Lz

    Input
        T, w: ndarray (Nx, Ny, Nz)
            Temperature and vertical velocity snapshot
        z: ndarray (Nz)
            Vertical grid (ascending)
        kappa: float
            Thermal diffusivity
        delta_T: float
            T_bottom - T_top
        Lz: float, optional
            Layer depth (default: SIMULATION_CONFIG extent in z).
            Chebyshev grids do not contain the walls, so the depth
            can not be taken from z.

    Output
        float
    """
    T = np.asarray(T, dtype=float)
    w = np.asarray(w, dtype=float)
    z = np.asarray(z, dtype=float)
    if Lz is None:
        Lz = SIMULATION_CONFIG["extent"][-1]

    dTdz = np.gradient(T, z, axis=-1)
    flux = horizontal_average(w * T - kappa * dTdz)
    # Mean over the sampled span of z
    mean_flux = trapezoid(flux, z) / (z[-1] - z[0])
    Nu = mean_flux / (kappa * delta_T / Lz)
    logger.debug("Nuvol: %10.6e", Nu)
    return float(Nu)
