"""
astroframe is a JAX library of astronomical reference-frame transformations: celestial
coordinate systems, Earth orientation corrections and observer vectors.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    AS2RAD,
    RAD2AS,
    MAS2RAD,
    JD_MJD_OFFSET,
    MJD2000,
    J2000,
    AU,
    OMEGA_EARTH,
)

from .config import set_dtype, get_dtype

from ._types import (
    Algorithm,
    EphemerisConfig,
    EphemType,
    Frame,
    ReductionMethod,
)

from .errors import (
    AstroFrameError,
    ConvergenceError,
    DataUnavailableError,
    InvalidInputError,
    UnsupportedBodyError,
    UnsupportedConfigurationError,
)

from .diagnostics import Diagnostics
from .bodies import Body

from .rotation import (
    SphericalPosition,
    rotate_to,
    rotate_from,
    rotate_position_to,
    rotate_position_from,
    Rx,
    Ry,
    Rz,
)

from .ellipsoid import (
    Ellipsoid,
    CustomEllipsoid,
    ELLIPSOIDS,
    WGS84,
    LATEST,
    get_ellipsoid,
)

from .coordinates import (
    CoordinateSystem,
    geodetic_to_geocentric,
    geocentric_to_geodetic,
    transform,
)

from .eop import (
    EarthOrientationStore,
    EOPCache,
    EOPCorrections,
    EOPSeries,
)

from .ephemerides import ProviderRegistry, default_registry
from .observer import ObserverFrame
