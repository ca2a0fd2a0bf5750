from .vector import (
    Vec3,
    UP,
    X_AXIS,
    angle_between,
)
