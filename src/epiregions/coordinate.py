"""
Geographic coordinates
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np
from attrs import frozen


@frozen
class Coordinate:
    """
    A point on the Earth's surface, in degrees
    """

    latitude: float
    """
    Latitude in degrees north
    """

    longitude: float
    """
    Longitude in degrees east
    """

    @classmethod
    def zero(cls) -> Coordinate:
        """
        The origin, i.e. the intersection of the equator and the prime meridian
        """
        return cls(latitude=0.0, longitude=0.0)

    @classmethod
    def center(cls, of: Iterable[Coordinate]) -> Coordinate:
        """
        Get the geographic centre of a collection of coordinates

        Each point is projected onto the unit sphere,
        the resulting vectors are averaged
        and the mean vector is projected back to latitude and longitude.

        Parameters
        ----------
        of
            Coordinates of which to find the centre

        Returns
        -------
        :
            Centre of `of`.
            If `of` is empty, [`zero`][(c).zero] is returned.

        Examples
        --------
        >>> Coordinate.center([Coordinate(10.0, 20.0)])
        Coordinate(latitude=10.0, longitude=20.0)
        >>> c = Coordinate.center([Coordinate(0.0, -10.0), Coordinate(0.0, 10.0)])
        >>> round(c.latitude, 6), round(c.longitude, 6)
        (0.0, 0.0)
        """
        points = list(of)
        if not points:
            return cls.zero()

        if len(points) == 1:
            return points[0]

        lat = np.radians([p.latitude for p in points])
        lon = np.radians([p.longitude for p in points])

        x = np.mean(np.cos(lat) * np.cos(lon))
        y = np.mean(np.cos(lat) * np.sin(lon))
        z = np.mean(np.sin(lat))

        centre_lon = np.arctan2(y, x)
        centre_lat = np.arctan2(z, np.hypot(x, y))

        return cls(
            latitude=float(np.degrees(centre_lat)),
            longitude=float(np.degrees(centre_lon)),
        )
