"""Shared enumerations and the per-computation ephemeris configuration.

The enums are plain :class:`enum.Enum` values resolved in Python, never
traced: a method or frame selects which code path is built, in the same
way boolean toggles select force models in a JAX dynamics closure.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ReductionMethod(enum.Enum):
    """Set of precession, nutation and obliquity models used for a reduction.

    Attributes:
        IAU_2009: IAU 2009 resolutions (2006 precession, 2000A nutation).
        IAU_2006: IAU 2006 precession with IAU 2000A nutation.
        IAU_2000: IAU 2000 precession-nutation.
        IAU_1976: IAU 1976 precession, 1980 nutation.
        LASKAR_1986: Laskar (1986) obliquity with 1976 precession.
        SIMON_1994: Simon et al. (1994) theory.
        WILLIAMS_1994: Williams (1994) theory.
        JPL_DE4XX: Reduction consistent with the JPL DE4xx integrations.
    """

    IAU_2009 = "IAU_2009"
    IAU_2006 = "IAU_2006"
    IAU_2000 = "IAU_2000"
    IAU_1976 = "IAU_1976"
    LASKAR_1986 = "LASKAR_1986"
    SIMON_1994 = "SIMON_1994"
    WILLIAMS_1994 = "WILLIAMS_1994"
    JPL_DE4XX = "JPL_DE4XX"

    @property
    def is_iau2000_family(self) -> bool:
        """``True`` for methods whose Earth orientation data carry dX/dY pole offsets."""
        return self in (ReductionMethod.IAU_2000, ReductionMethod.IAU_2006, ReductionMethod.IAU_2009)

    @property
    def uses_polar_motion(self) -> bool:
        """``False`` for the dynamical theories that ignore polar motion and pole offsets."""
        return self not in (
            ReductionMethod.JPL_DE4XX,
            ReductionMethod.WILLIAMS_1994,
            ReductionMethod.SIMON_1994,
        )


class Frame(enum.Enum):
    """Output reference frame of a reduction.

    Attributes:
        ICRF: International Celestial Reference Frame.
        DYNAMICAL_EQUINOX_J2000: Mean dynamical equator and equinox of J2000.
        FK5: FK5 catalogue frame.
        FK4: FK4 catalogue frame (B1950). Not supported by the frame
            conversions of this package.
    """

    ICRF = "ICRF"
    DYNAMICAL_EQUINOX_J2000 = "DYNAMICAL_EQUINOX_J2000"
    FK5 = "FK5"
    FK4 = "FK4"


class EphemType(enum.Enum):
    """Kind of position requested.

    Attributes:
        APPARENT: Referred to the true equator and equinox of date.
        ASTROMETRIC: Referred to the mean equator and equinox.
        GEOMETRIC: Geometric position, no light-time or aberration.
    """

    APPARENT = "APPARENT"
    ASTROMETRIC = "ASTROMETRIC"
    GEOMETRIC = "GEOMETRIC"


class Algorithm(enum.Enum):
    """Ephemeris theory used to compute body positions.

    Only ``JPL_KEPLERIAN`` is built in; the other theories are supplied by
    callers through a :class:`~astroframe.ephemerides.ProviderRegistry`.
    """

    MOSHIER = "MOSHIER"
    VSOP87 = "VSOP87"
    SERIES96 = "SERIES96"
    ELP2000 = "ELP2000"
    JPL_DE4XX = "JPL_DE4XX"
    JPL_KEPLERIAN = "JPL_KEPLERIAN"


@dataclass(frozen=True)
class EphemerisConfig:
    """Options for one ephemeris computation.

    Configuration is static: every field is a Python value resolved before
    any array computation, so two configurations produce two code paths.

    Args:
        method: Precession/nutation/obliquity model set.
        frame: Output reference frame.
        ephem_type: Apparent, astrometric or geometric positions.
        equinox: Julian date (TT) of the output equinox, or ``None`` for the
            equinox of date.
        topocentric: Compute positions for the observer's location rather
            than the centre of its body.
        correct_for_eop: Apply Earth orientation corrections.
        correct_eop_for_tides: Add the diurnal/subdiurnal ocean tide model
            to the Earth orientation corrections.
        algorithm: Ephemeris theory for body positions.
        allow_eop_prediction: Extrapolate Earth orientation data past the
            end of the record source.

    Examples:
        ```python
        from astroframe import EphemerisConfig, ReductionMethod
        config = EphemerisConfig(method=ReductionMethod.IAU_1976)
        config.frame
        ```
    """

    method: ReductionMethod = ReductionMethod.IAU_2009
    frame: Frame = Frame.ICRF
    ephem_type: EphemType = EphemType.APPARENT
    equinox: float | None = None
    topocentric: bool = True
    correct_for_eop: bool = True
    correct_eop_for_tides: bool = False
    algorithm: Algorithm = Algorithm.JPL_KEPLERIAN
    allow_eop_prediction: bool = False

    @property
    def of_date(self) -> bool:
        """``True`` when positions are referred to the equinox of date."""
        return self.equinox is None
