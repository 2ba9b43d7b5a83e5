"""
The `constants` module defines the mathematical, time and physical constants used by the
reference frame transformations.
"""

from jax.numpy import pi as PI

# Mathematical Constants
"""
Two times pi. Units: *rad*
"""
TWO_PI = 2.0 * PI

"""
Half of pi. Units: *rad*
"""
PI_OVER_TWO = 0.5 * PI

"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = 2.0 * PI / 360.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 360.0 / (PI * 2.0)

"""
Constant to convert arcseconds to radians. Equal to 2pi/(360*3600). Units: *rad/as*
"""
AS2RAD = 2.0 * PI / 360.0 / 3600.0

"""
Constant to convert radians to arcseconds. Equal to (360*3600)/(2pi). Units: *as/rad*
"""
RAD2AS = 360.0 * 3600.0 / PI / 2.0

"""
Constant to convert milliarcseconds to radians. Units: *rad/mas*
"""
MAS2RAD = AS2RAD * 1.0e-3

"""
Constant to convert hours of right ascension to radians. Units: *rad/h*
"""
HOUR2RAD = PI / 12.0

"""
Arcseconds in a full circle. Units: *as*
"""
TURNAS = 1296000.0

# Time Constants

"""
Offset between Julian Date and Modified Julian Date. Units: *days*
"""
JD_MJD_OFFSET = 2400000.5

"""
Julian Date of the J2000.0 epoch (2000-01-01 12:00:00 TT). Units: *days*
"""
J2000 = 2451545.0

"""
Modified Julian Date of the J2000.0 epoch (2000-01-01 12:00:00 TT). Units: *days*
"""
MJD2000 = 51544.5

"""
Days per Julian century. Units: *days*
"""
JULIAN_DAYS_PER_CENTURY = 36525.0

"""
Seconds per day. Units: *s*
"""
SECONDS_PER_DAY = 86400.0

"""
TT - TAI offset, constant by definition. Units: *s*
"""
TT_TAI = 32.184

# Physical Constants

"""
Astronomical Unit, IAU 2012 definition. Units: *km*

References:

1. P. Gérard and B. Luzum, *IERS Technical Note 36*, 2010
"""
AU = 1.49597870700e8

"""
Nominal mean angular velocity of the Earth. Units: *rad/s*

References:

1. P. Gérard and B. Luzum, *IERS Technical Note 36*, 2010
"""
OMEGA_EARTH = 7.292115146706979e-5

"""
Mean obliquity of the ecliptic at J2000.0, IAU 2006. Units: *rad*
"""
OBLIQUITY_J2000 = 84381.406 * AS2RAD
