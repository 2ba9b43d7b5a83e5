"""Registry of body-position providers keyed by ``(algorithm, body)``.

A provider is any callable taking a Julian date (TDB) and returning a
position-velocity vector ``(6,)`` in AU and AU/day, referred to the mean
equator and equinox of J2000:

- planets (and ``Body.EARTH``): heliocentric state;
- ``Body.MOON``: geocentric state;
- natural satellites: state relative to their planet.

Satellite theories do not depend on the planetary theory in use, so a
provider may be registered for every algorithm at once by leaving
*algorithm* as ``None``.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional

from jax import Array

from astroframe._types import Algorithm
from astroframe.bodies import Body
from astroframe.ephemerides.keplerian import KEPLERIAN_BODIES, keplerian_state
from astroframe.errors import UnsupportedConfigurationError

logger = logging.getLogger(__name__)

EphemerisProvider = Callable[[float], Array]
ProviderKey = tuple[Optional[Algorithm], Body]


class ProviderRegistry:
    """Mapping from ``(algorithm, body)`` to an :data:`EphemerisProvider`.

    Examples:
        ```python
        from astroframe import Algorithm
        from astroframe.bodies import Body
        from astroframe.ephemerides import ProviderRegistry, keplerian_state
        registry = ProviderRegistry()
        registry.register(Body.MARS, lambda jd: keplerian_state(Body.MARS, jd), Algorithm.JPL_KEPLERIAN)
        state = registry.get(Algorithm.JPL_KEPLERIAN, Body.MARS)(2460476.5)
        ```
    """

    def __init__(self) -> None:
        self._providers: dict[ProviderKey, EphemerisProvider] = {}

    def register(
        self,
        body: Body,
        provider: EphemerisProvider,
        algorithm: Algorithm | None = None,
    ) -> None:
        """Register *provider* for *body*.

        Args:
            body: Body whose state the provider returns.
            provider: Callable ``provider(jd_tdb) -> Array``, shape ``(6,)``.
            algorithm: Theory the provider implements, or ``None`` to serve
                every algorithm without a more specific entry.
        """
        key = (algorithm, body)
        if key in self._providers:
            logger.debug("Replacing provider for %s / %s", algorithm, body.name)
        self._providers[key] = provider

    def unregister(self, body: Body, algorithm: Algorithm | None = None) -> None:
        self._providers.pop((algorithm, body), None)

    def find(self, algorithm: Algorithm, body: Body) -> EphemerisProvider | None:
        """Provider for the pair, falling back to the algorithm-independent entry."""
        provider = self._providers.get((algorithm, body))
        if provider is None:
            provider = self._providers.get((None, body))
        return provider

    def get(self, algorithm: Algorithm, body: Body) -> EphemerisProvider:
        """Like :meth:`find`, but raise when no provider exists.

        Raises:
            UnsupportedConfigurationError: If neither ``(algorithm, body)``
                nor ``(None, body)`` is registered.
        """
        provider = self.find(algorithm, body)
        if provider is None:
            raise UnsupportedConfigurationError(
                f"Invalid/unsupported algorithm {algorithm.name} for {body.name}."
            )
        return provider

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        algorithm, body = key
        return self.find(algorithm, body) is not None

    def __iter__(self) -> Iterator[ProviderKey]:
        return iter(list(self._providers))

    def __len__(self) -> int:
        return len(self._providers)


def _keplerian_provider(body: Body) -> EphemerisProvider:
    def provider(jd_tdb: float) -> Array:
        return keplerian_state(body, jd_tdb)

    return provider


def default_registry() -> ProviderRegistry:
    """Registry with the built-in ``Algorithm.JPL_KEPLERIAN`` planets.

    The Moon and the natural satellites have no built-in theory; their
    providers must be registered by the caller.
    """
    registry = ProviderRegistry()
    for body in KEPLERIAN_BODIES:
        registry.register(body, _keplerian_provider(body), Algorithm.JPL_KEPLERIAN)
    return registry
