# asteroid_threat/physics/utils.py
import math

import numpy as np

from asteroid_threat.config.settings import AU_KM


def degrees_to_radians(degrees):
    return degrees * (math.pi / 180.0)


def radians_to_degrees(radians):
    return radians * (180.0 / math.pi)


def clamp(value, lo, hi):
    return min(max(value, lo), hi)


# Vector operations
def vector_length(v):
    return float(np.linalg.norm(np.asarray(v, dtype=float)))


def normalize_vector(v):
    """Unit vector along v; the zero vector maps to itself."""
    arr = np.asarray(v, dtype=float)
    n = np.linalg.norm(arr)
    if n == 0:
        return np.zeros_like(arr)
    return arr / n


def distance(p1, p2):
    return float(np.linalg.norm(np.asarray(p2, dtype=float) - np.asarray(p1, dtype=float)))


def rotation_x(angle):
    c, s = math.cos(angle), math.sin(angle)
    return np.array([
        [1.0, 0.0, 0.0],
        [0.0, c, -s],
        [0.0, s, c],
    ])


def rotation_z(angle):
    c, s = math.cos(angle), math.sin(angle)
    return np.array([
        [c, -s, 0.0],
        [s, c, 0.0],
        [0.0, 0.0, 1.0],
    ])


# Orbital helpers
def solve_kepler(mean_anomaly, eccentricity, tolerance=1e-6, max_iter=50):
    """
    Solve Kepler's equation M = E - e*sin(E) for the eccentric anomaly E
    with Newton iterations started at E = M.
    """
    E = float(mean_anomaly)
    for _ in range(max_iter):
        delta = E - eccentricity * math.sin(E) - mean_anomaly
        if abs(delta) < tolerance:
            break
        E -= delta / (1.0 - eccentricity * math.cos(E))
    return E


def sphere_volume(radius):
    return (4.0 / 3.0) * math.pi * radius ** 3


def circle_area(radius):
    return math.pi * radius ** 2


# Unit conversions
def km_to_m(km):
    return km * 1000.0


def m_to_km(m):
    return m / 1000.0


def au_to_km(au):
    return au * AU_KM


def km_to_au(km):
    return km / AU_KM


# Formatting
def format_scientific(value, precision=2):
    return f"{value:.{precision}e}"


def format_large_number(value):
    if value >= 1e12:
        return f"{value / 1e12:.2f}T"
    if value >= 1e9:
        return f"{value / 1e9:.2f}B"
    if value >= 1e6:
        return f"{value / 1e6:.2f}M"
    if value >= 1e3:
        return f"{value / 1e3:.2f}K"
    return f"{value:.2f}"


def format_currency(value):
    if value >= 1e12:
        return f"${value / 1e12:.1f}T"
    if value >= 1e9:
        return f"${value / 1e9:.1f}B"
    if value >= 1e6:
        return f"${value / 1e6:.1f}M"
    if not math.isfinite(value):
        return f"${value}"
    return f"${math.floor(value + 0.5)}"


def format_distance(meters):
    if meters >= 1e9:
        return f"{meters / 1e9:.2f} million km"
    if meters >= 1e6:
        return f"{meters / 1e6:.2f} thousand km"
    if meters >= 1e3:
        return f"{meters / 1e3:.2f} km"
    return f"{meters:.0f} m"


def round_half_up(x):
    """Nearest integer (as float), halves away from -inf; NaN/inf pass through."""
    if not math.isfinite(x):
        return x
    return float(math.floor(x + 0.5))
