"""
The `constants` module defines the mathematical and geodetic constants shared by the transforms.
"""

from math import pi as PI

# Mathematical Constants
"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = PI / 180.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 180.0 / PI

"""
Constant to convert arcseconds to radians. Units: *rad/as*

Value used by the Bursa-Wolf parameters of ``TOWGS84`` clauses.
"""
SEC2RAD = 4.84813681109535993589914102357e-6

"""
Half of pi. Units: *rad*
"""
HALF_PI = PI * 0.5

"""
Two times pi. Units: *rad*
"""
TWO_PI = PI * 2.0

"""
Generic comparison epsilon of the projection formulas (pole tests, equal
standard parallels). Units: *rad*
"""
EPSLN = 1.0e-10

"""
Number of extra passes ``adjust_lon`` makes before giving up on normalization.
"""
MAX_VAL = 4

"""
Largest 32-bit signed integer, used to pick the ``adjust_lon`` strategy.
"""
PRJ_MAXLONG = 2147483647.0

"""
Double-precision long limit, used to pick the ``adjust_lon`` strategy.
"""
DBLLONG = 4.61168601e18

# Geodetic Constants
"""
Earth's semi-major axis as defined by the WGS84 geodetic system. [m]

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_a = 6378137.0  # WGS-84 semi-major axis

"""
Inverse of Earth's ellipsoidal flattening.  WGS84 Value.

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_INV_F = 298.257223563

"""
Earth's ellipsoidal flattening.  WGS84 Value.
"""
WGS84_f = 1.0 / WGS84_INV_F  # WGS-84 flattening

"""
Cosine of 67.5 degrees. Selects the height formula branch of Bowring's
geocentric-to-geodetic conversion.
"""
COS_67P5 = 0.38268343236508977

"""
Bowring's initial-estimate scale factor for the vertical component.
"""
AD_C = 1.0026
