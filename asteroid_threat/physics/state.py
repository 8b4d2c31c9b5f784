# asteroid_threat/physics/state.py
import numpy as np


class State:
    """
    Snapshot of a propagated body in the primary-centred frame.
    r: position (scene units), v: velocity (scene units / time unit), anomaly: phase angle (rad).
    """
    def __init__(self, position, velocity, anomaly=0.0):
        if len(position) != 3 or len(velocity) != 3:
            raise ValueError("Position and velocity must be 3D vectors.")
        self.r = np.array(position, dtype=float)
        self.v = np.array(velocity, dtype=float)
        self.anomaly = float(anomaly)

    def copy(self):
        return State(self.r.copy(), self.v.copy(), self.anomaly)

    def __repr__(self):
        return f"State(r={self.r}, v={self.v}, anomaly={self.anomaly:.6f})"
