"""Solar system bodies that can host an observer.

Each :class:`Body` carries its IAU shape (equatorial and polar radius), its
central body (for natural satellites), its mean rotation rate and the angle
of its prime meridian at J2000.  Radii
follow the IAU WGCCRE 2009 report; rotation rates are the ``W`` rates of the
same report (synchronous rotators use their orbital mean motion).  Hyperion
rotates chaotically and is given a zero prime meridian angle.
"""

from __future__ import annotations

import enum
from typing import NamedTuple

from astroframe.constants import DEG2RAD, J2000, OMEGA_EARTH, SECONDS_PER_DAY


class BodyData(NamedTuple):
    """Physical parameters of a body.

    Attributes:
        equatorial_radius: Equatorial radius [km].
        polar_radius: Polar radius [km].
        central_body: Name of the body it orbits (``"SUN"`` for planets).
        rotation_rate_deg_per_day: Mean sidereal rotation rate [deg/day].
        prime_meridian_deg: Prime meridian angle ``W0`` at J2000 TDB [deg].
    """

    equatorial_radius: float
    polar_radius: float
    central_body: str
    rotation_rate_deg_per_day: float
    prime_meridian_deg: float = 0.0


class Body(enum.Enum):
    """Observer host bodies."""

    SUN = BodyData(696000.0, 696000.0, "", 14.1844, 84.176)
    MERCURY = BodyData(2439.7, 2439.7, "SUN", 6.1385025, 329.5469)
    VENUS = BodyData(6051.8, 6051.8, "SUN", -1.4813688, 160.20)
    EARTH = BodyData(6378.1366, 6356.7519, "SUN", OMEGA_EARTH * SECONDS_PER_DAY / DEG2RAD, 190.147)
    MOON = BodyData(1737.4, 1737.4, "EARTH", 13.17635815, 38.3213)
    MARS = BodyData(3396.19, 3376.2, "SUN", 350.89198226, 176.630)
    JUPITER = BodyData(71492.0, 66854.0, "SUN", 870.536, 284.95)
    SATURN = BodyData(60268.0, 54364.0, "SUN", 810.7939024, 38.90)
    URANUS = BodyData(25559.0, 24973.0, "SUN", -501.1600928, 203.81)
    NEPTUNE = BodyData(24764.0, 24341.0, "SUN", 541.1397757, 249.978)
    PLUTO = BodyData(1195.0, 1195.0, "SUN", -56.3625225, 302.695)
    PHOBOS = BodyData(13.0, 9.1, "MARS", 1128.8447569, 35.06)
    DEIMOS = BodyData(7.8, 5.1, "MARS", 285.161897, 79.41)
    IO = BodyData(1829.4, 1815.7, "JUPITER", 203.4889538, 200.39)
    EUROPA = BodyData(1562.6, 1559.5, "JUPITER", 101.3747235, 36.022)
    GANYMEDE = BodyData(2631.2, 2631.2, "JUPITER", 50.3176081, 44.064)
    CALLISTO = BodyData(2410.3, 2410.3, "JUPITER", 21.5710715, 259.51)
    MIMAS = BodyData(207.8, 190.6, "SATURN", 381.994555, 333.46)
    ENCELADUS = BodyData(256.6, 248.3, "SATURN", 262.7318996, 6.32)
    TETHYS = BodyData(538.4, 526.3, "SATURN", 190.6979085, 8.95)
    DIONE = BodyData(563.4, 559.6, "SATURN", 131.5349316, 357.6)
    RHEA = BodyData(765.0, 762.4, "SATURN", 79.6900478, 235.16)
    TITAN = BodyData(2575.15, 2574.47, "SATURN", 22.5769768, 186.5855)
    HYPERION = BodyData(180.1, 102.7, "SATURN", 16.91995, 0.0)
    IAPETUS = BodyData(745.7, 712.1, "SATURN", 4.5379572, 355.2)
    MIRANDA = BodyData(240.4, 232.9, "URANUS", -254.6906892, 30.70)
    ARIEL = BodyData(581.1, 577.7, "URANUS", -142.8356681, 156.22)
    UMBRIEL = BodyData(584.7, 584.7, "URANUS", -86.8688923, 108.05)
    TITANIA = BodyData(788.9, 788.9, "URANUS", -41.3514316, 77.74)
    OBERON = BodyData(761.4, 761.4, "URANUS", -26.7394932, 6.77)

    @property
    def data(self) -> BodyData:
        return self.value


# Satellites in the index order used by the satellite theories of each planet.
SATELLITES: dict[Body, tuple[Body, ...]] = {
    Body.MARS: (Body.PHOBOS, Body.DEIMOS),
    Body.JUPITER: (Body.IO, Body.EUROPA, Body.GANYMEDE, Body.CALLISTO),
    Body.SATURN: (
        Body.MIMAS,
        Body.ENCELADUS,
        Body.TETHYS,
        Body.DIONE,
        Body.RHEA,
        Body.TITAN,
        Body.HYPERION,
        Body.IAPETUS,
    ),
    Body.URANUS: (Body.MIRANDA, Body.ARIEL, Body.UMBRIEL, Body.TITANIA, Body.OBERON),
}


def central_body(body: Body) -> Body | None:
    """Return the body that *body* orbits, or ``None`` for the Sun."""
    name = body.data.central_body
    return Body[name] if name else None


def is_natural_satellite(body: Body) -> bool:
    """Return ``True`` when *body* orbits a planet rather than the Sun."""
    parent = central_body(body)
    return parent is not None and parent is not Body.SUN


def satellite_index(body: Body) -> int:
    """One-based index of a satellite within its planet's main satellite list.

    Returns 0 when *body* is not one of the main satellites of Mars, Jupiter,
    Saturn or Uranus.
    """
    parent = central_body(body)
    members = SATELLITES.get(parent, ()) if parent is not None else ()
    return members.index(body) + 1 if body in members else 0


def mean_rotation_rate(body: Body) -> float:
    """Mean rotation rate of *body* in rad/s."""
    if body is Body.EARTH:
        return OMEGA_EARTH
    return body.data.rotation_rate_deg_per_day * DEG2RAD / SECONDS_PER_DAY


def prime_meridian_angle(body: Body, jd_tdb: float) -> float:
    """Rotation angle ``W = W0 + rate * d`` of *body* in radians, ``[0, 2*pi)``.

    Args:
        body: Host body.
        jd_tdb: Julian date, TDB.
    """
    days = jd_tdb - J2000
    w = body.data.prime_meridian_deg + body.data.rotation_rate_deg_per_day * days
    return (w % 360.0) * DEG2RAD
