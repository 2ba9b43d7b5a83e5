"""Sample lines of the IERS EOP file layouts, shared by the EOP tests."""

from __future__ import annotations

from astroframe.time import mjd_to_date

C04_LINE = (
    "2000   1   1  51544   0.043282   0.377909   0.3554880   0.0009830"
    "  -0.050471  -0.002427   0.000075   0.000069  0.0000040  0.0000064"
    "   0.000336   0.000337"
)

C04_HEADER = """\
                          EARTH ORIENTATION PARAMETER (EOP) PRODUCT CENTER
      Date      MJD      x          y        UT1-UTC       LOD         dPsi        dEps
               (0 h)    (")        (")         (s)         (s)          (")         (")
"""


def c04_line(mjd: int, ut1_utc: float = 0.35) -> str:
    """Build a C04 line for day *mjd*."""
    y, m, d = mjd_to_date(mjd)
    return (
        f"{y:4d}{m:4d}{d:4d}{mjd:7d}   0.043282   0.377909{ut1_utc:12.7f}   0.0009830"
        "  -0.050471  -0.002427   0.000075   0.000069  0.0000040  0.0000064"
        "   0.000336   0.000337"
    )


def finals_line(
    mjd: float,
    pm_x: float,
    pm_y: float,
    ut1_utc: float,
    lod_ms: float | None = None,
    dx_mas: float | None = None,
    dy_mas: float | None = None,
) -> str:
    """Build a line in the IERS standard (finals) fixed-column layout."""
    chars = [" "] * 187

    def put(start: int, stop: int, text: str) -> None:
        chars[start:stop] = text.rjust(stop - start)

    put(0, 6, "231225")
    put(6, 15, f"{mjd:.2f}")
    put(16, 17, "I")
    put(17, 27, f"{pm_x:.6f}")
    put(36, 46, f"{pm_y:.6f}")
    put(57, 58, "I")
    put(58, 68, f"{ut1_utc:.7f}")
    if lod_ms is not None:
        put(78, 86, f"{lod_ms:.4f}")
    if dx_mas is not None:
        put(96, 106, f"{dx_mas:.3f}")
    if dy_mas is not None:
        put(115, 125, f"{dy_mas:.3f}")
    return "".join(chars).rstrip()


def ncep_line(mjd: int, pm_x: float, pm_y: float, ut1_utc: float, lod: float, dpsi: float, deps: float) -> str:
    """Build a line of the NCEP prediction file."""
    return f"{mjd}.0000 {pm_x:9.6f} {pm_y:9.6f} {ut1_utc:10.7f} {lod:9.7f} {dpsi:9.6f} {deps:9.6f}"
