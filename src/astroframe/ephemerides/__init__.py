"""Body-position providers used to place an observer in the solar system.

Planetary, lunar and satellite theories are reached through a
:class:`ProviderRegistry` keyed by ``(algorithm, body)``.  Only the JPL
approximate Keplerian elements are built in (:mod:`.keplerian`); other
theories are registered by callers.

Usage:
    ```python
    from astroframe import Algorithm
    from astroframe.bodies import Body
    from astroframe.ephemerides import default_registry

    registry = default_registry()
    state = registry.get(Algorithm.JPL_KEPLERIAN, Body.JUPITER)(2460476.5)
    ```
"""

from astroframe.ephemerides._registry import (
    EphemerisProvider,
    ProviderRegistry,
    default_registry,
)
from astroframe.ephemerides.keplerian import (
    KEPLERIAN_BODIES,
    keplerian_position,
    keplerian_state,
    solve_kepler,
)

__all__ = [
    "EphemerisProvider",
    "KEPLERIAN_BODIES",
    "ProviderRegistry",
    "default_registry",
    "keplerian_position",
    "keplerian_state",
    "solve_kepler",
]
