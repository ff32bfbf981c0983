"""
Geometry helpers shared by the click resolver and the globe renderer.

Spherical conventions follow three-globe: latitude comes from the polar angle
measured off the +Y axis, longitude from the azimuth in the XZ plane with
lng 0 on +Z and lng 90 on +X. `lnglat_to_cartesian` and `cartesian_to_lnglat`
must stay exact inverses of each other or picks land on the wrong country.

Point-in-polygon and area treat (lng, lat) as planar (x, y).
"""

import math

import numpy as np
from shapely.geometry import MultiPolygon, Point, Polygon

from globe_quiz.config import GLOBE_RADIUS


# ==================== Spherical Projection ====================
def lnglat_to_cartesian(lng, lat, radius=GLOBE_RADIUS):
    """Shape (3,) for scalar input, (3, N) for arrays of N coordinates."""
    phi = np.radians(90 - np.asarray(lat, dtype=float))
    theta = np.radians(90 - np.asarray(lng, dtype=float))
    return np.array([
        radius * np.sin(phi) * np.cos(theta),
        radius * np.cos(phi),
        radius * np.sin(phi) * np.sin(theta),
    ])


def cartesian_to_lnglat(point, radius=GLOBE_RADIUS):
    x, y, z = (float(c) for c in point[:3])
    r = math.sqrt(x * x + y * y + z * z) or radius
    phi = math.acos(max(-1.0, min(1.0, y / r)))
    theta = math.atan2(z, x)
    lat = 90 - math.degrees(phi)
    lng = 90 - math.degrees(theta)
    # keep longitude continuous across the date line
    if theta < -math.pi / 2:
        lng -= 360
    if lng > 180:
        lng -= 360
    if lng < -180:
        lng += 360
    return lng, lat


# ==================== Ray / Sphere ====================
def ray_sphere_intersection(origin, direction, radius=GLOBE_RADIUS):
    """
    Nearest point where the ray hits a sphere centred on the world origin.

    Returns None when the ray misses or the sphere lies entirely behind it.
    """
    origin = np.asarray(origin, dtype=float)
    direction = np.asarray(direction, dtype=float)
    norm = np.linalg.norm(direction)
    if norm == 0:
        return None
    direction = direction / norm

    b = float(np.dot(origin, direction))
    c = float(np.dot(origin, origin)) - radius * radius
    disc = b * b - c
    if disc < 0:
        return None
    root = math.sqrt(disc)
    t = -b - root
    if t < 0:
        # origin inside the sphere: take the far side
        t = -b + root
    if t < 0:
        return None
    return origin + t * direction


# ==================== Planar Polygon Tests ====================
def iter_polygons(geometry):
    if isinstance(geometry, Polygon):
        yield geometry
    elif isinstance(geometry, MultiPolygon):
        yield from geometry.geoms


def point_in_ring(point, ring):
    """Planar test of (lng, lat) against one closed ring. Points on the boundary count as inside."""
    if len(ring) < 3:
        return False
    return Polygon(ring).covers(Point(point))


def point_in_polygon(point, polygon):
    # a point on a hole's edge is still on the polygon's boundary
    if not point_in_ring(point, polygon.exterior.coords):
        return False
    p = Point(point)
    return not any(Polygon(hole).contains(p) for hole in polygon.interiors)


def point_in_geometry(point, geometry):
    """True if any polygon of a (multi-)polygon contains the point."""
    return any(point_in_polygon(point, polygon) for polygon in iter_polygons(geometry))


def ring_area(ring):
    if len(ring) < 3:
        return 0.0
    return abs(Polygon(ring).area)


def polygon_area(polygon):
    return ring_area(polygon.exterior.coords) - sum(ring_area(hole.coords) for hole in polygon.interiors)


def geometry_area(geometry):
    return sum(polygon_area(polygon) for polygon in iter_polygons(geometry))
