"""Fixed playfield and normalisation constants."""

NORMALIZED_RADIUS = 52.0
PLAYFIELD_WIDTH = 512.0

# Returned by the angle calculation when the triangle is too small to measure.
DEGENERATE_ANGLE = -1.0

ANGLE_METHOD_ATAN2 = "atan2"
ANGLE_METHOD_ACOS = "acos"
ANGLE_METHODS = (ANGLE_METHOD_ATAN2, ANGLE_METHOD_ACOS)
