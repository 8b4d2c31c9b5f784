# asteroid_threat/errors.py


class InvalidOrbitError(ValueError):
    """Orbital elements that do not describe a closed ellipse (a<=0, period<=0, e outside [0,1))."""
    pass


class UnknownMethodError(ValueError):
    """Defense method id that is not part of the fixed catalog."""
    pass
