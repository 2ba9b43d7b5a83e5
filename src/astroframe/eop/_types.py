"""Type definitions for Earth Orientation Parameters (EOP).

Provides the core data types for EOP storage and lookup:

- :class:`EOPSeries`: Which family of IERS series a record source holds.
- :class:`EOPRecord`: One parsed daily record, read-only once parsed.
- :class:`EOPCorrections`: Interpolated corrections for an instant.
- :class:`EOPCacheEntry`: The memoized result of the last lookup.
- :class:`EOPRecordSource`: Protocol implemented by record sources.

Angles are kept in arcseconds and times in seconds, the units of the IERS
files, so that records can be compared directly against the published data.
"""

from __future__ import annotations

import enum
from typing import NamedTuple, Protocol, runtime_checkable

from astroframe._types import ReductionMethod


class EOPSeries(enum.Enum):
    """IERS series family.

    Attributes:
        IAU1980: Nutation corrections given as dPsi/dEps.
        IAU2000: Celestial pole offsets given as dX/dY.
    """

    IAU1980 = "IAU1980"
    IAU2000 = "IAU2000"

    @classmethod
    def for_method(cls, method: ReductionMethod) -> EOPSeries:
        """Series whose pole offsets match the nutation theory of *method*."""
        return cls.IAU2000 if method.is_iau2000_family else cls.IAU1980


class EOPRecord(NamedTuple):
    """One daily Earth orientation record.

    Attributes:
        mjd: Modified Julian Date of the record (0h UTC), integer day.
        pm_x: Polar motion x [arcsec].
        pm_y: Polar motion y [arcsec].
        ut1_utc: UT1-UTC [s].
        lod: Length of day excess [s].
        dpsi_or_dx: dPsi (IAU1980 series) or dX (IAU2000 series) [arcsec].
        deps_or_dy: dEps (IAU1980 series) or dY (IAU2000 series) [arcsec].
    """

    mjd: int
    pm_x: float
    pm_y: float
    ut1_utc: float
    lod: float
    dpsi_or_dx: float
    deps_or_dy: float


class EOPCorrections(NamedTuple):
    """Earth orientation corrections at an instant.

    Attributes:
        dpsi: Correction to nutation in longitude [arcsec].
        deps: Correction to nutation in obliquity [arcsec].
        pm_x: Polar motion x [arcsec].
        pm_y: Polar motion y [arcsec].
        ut1_utc: UT1-UTC [s].
        predicted: ``True`` when the values were extrapolated or taken from
            a prediction feed.
    """

    dpsi: float = 0.0
    deps: float = 0.0
    pm_x: float = 0.0
    pm_y: float = 0.0
    ut1_utc: float = 0.0
    predicted: bool = False


ZERO_CORRECTIONS = EOPCorrections()
"""All-zero corrections."""


class EOPCacheEntry(NamedTuple):
    """Result of the last lookup, with the date and method it was made for."""

    corrections: EOPCorrections
    jd_utc: float
    method: ReductionMethod


@runtime_checkable
class EOPRecordSource(Protocol):
    """Source of daily EOP records, keyed by integer MJD."""

    def records(self, mjd_start: int, mjd_end: int) -> dict[int, EOPRecord]:
        """Records for the days ``mjd_start..mjd_end`` inclusive, keyed by MJD.

        Days without a record are absent from the result; a window with no
        record at all raises ``DataUnavailableError``.
        """
        ...

    def first_mjd(self) -> int:
        ...

    def last_mjd(self) -> int:
        ...
