"""
Click-to-country resolution.

A click in image pixels becomes a camera ray, the ray hits the pick sphere,
the hit is taken back into the globe's own frame (the globe may be rotated)
and inverse-projected to (lng, lat). The country whose polygons contain that
point is the answer; when several overlap, the smallest one wins so enclaves
stay clickable.
"""

import logging
import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from globe_quiz.config import (
    CAMERA_DISTANCE,
    CAMERA_FOV,
    GLOBE_RADIUS,
    IMAGE_HEIGHT,
    IMAGE_WIDTH,
)
from globe_quiz.features import is_selectable
from globe_quiz.geometry import cartesian_to_lnglat, ray_sphere_intersection

logger = logging.getLogger(__name__)

Vector = Tuple[float, float, float]


def _unit(v):
    v = np.asarray(v, dtype=float)
    return v / np.linalg.norm(v)


# ==================== Camera ====================
@dataclass(frozen=True)
class Camera:
    """Perspective camera; `fov` is the vertical field of view in degrees."""

    position: Vector = (0.0, 0.0, CAMERA_DISTANCE)
    target: Vector = (0.0, 0.0, 0.0)
    up: Vector = (0.0, 1.0, 0.0)
    fov: float = CAMERA_FOV
    width: int = IMAGE_WIDTH
    height: int = IMAGE_HEIGHT

    @classmethod
    def at_distance(cls, distance, width=IMAGE_WIDTH, height=IMAGE_HEIGHT, fov=CAMERA_FOV):
        return cls(position=(0.0, 0.0, float(distance)), width=width, height=height, fov=fov)

    @property
    def aspect(self):
        return self.width / self.height

    def basis(self):
        forward = _unit(np.subtract(self.target, self.position))
        right = _unit(np.cross(forward, self.up))
        true_up = np.cross(right, forward)
        return forward, right, true_up

    def ray(self, ndc_x, ndc_y):
        forward, right, true_up = self.basis()
        half_h = math.tan(math.radians(self.fov) / 2)
        half_w = half_h * self.aspect
        direction = forward + ndc_x * half_w * right + ndc_y * half_h * true_up
        return np.asarray(self.position, dtype=float), _unit(direction)

    def project_points(self, points):
        """(N, 3) world points -> pixel x, pixel y and depth arrays."""
        forward, right, true_up = self.basis()
        v = np.atleast_2d(np.asarray(points, dtype=float)) - np.asarray(self.position, dtype=float)
        depth = v @ forward
        half_h = math.tan(math.radians(self.fov) / 2)
        half_w = half_h * self.aspect
        with np.errstate(divide="ignore", invalid="ignore"):
            ndc_x = (v @ right) / (depth * half_w)
            ndc_y = (v @ true_up) / (depth * half_h)
        px = (ndc_x + 1) / 2 * self.width
        py = (1 - ndc_y) / 2 * self.height
        return px, py, depth

    def project(self, point):
        """World point -> (px, py), or None when it is behind the camera."""
        px, py, depth = self.project_points(point)
        if depth[0] <= 0:
            return None
        return float(px[0]), float(py[0])


def pointer_to_ndc(px, py, width, height):
    return (px / width) * 2 - 1, -(py / height) * 2 + 1


# ==================== Globe Transform ====================
def view_rotation(center_lng=0.0, center_lat=0.0):
    """
    4x4 globe transform that turns (center_lng, center_lat) towards +Z,
    i.e. towards the default camera. Stands in for orbit controls.
    """
    a = math.radians(-center_lng)
    b = math.radians(center_lat)
    rot_y = np.array([
        [math.cos(a), 0, math.sin(a), 0],
        [0, 1, 0, 0],
        [-math.sin(a), 0, math.cos(a), 0],
        [0, 0, 0, 1],
    ])
    rot_x = np.array([
        [1, 0, 0, 0],
        [0, math.cos(b), -math.sin(b), 0],
        [0, math.sin(b), math.cos(b), 0],
        [0, 0, 0, 1],
    ])
    return rot_x @ rot_y


def to_world(transform, points):
    """Apply a 4x4 transform to one point of shape (3,) or to an (N, 3) array."""
    points = np.asarray(points, dtype=float)
    ones = np.ones(points.shape[:-1] + (1,))
    return (np.concatenate([points, ones], axis=-1) @ np.asarray(transform, dtype=float).T)[..., :3]


def to_local(transform, point):
    return (np.linalg.inv(np.asarray(transform)) @ np.append(point, 1.0))[:3]


# ==================== Picking ====================
def pick_lnglat(px, py, camera, transform=None, radius=GLOBE_RADIUS):
    """(lng, lat) under the pointer, or None when the click misses the globe."""
    origin, direction = camera.ray(*pointer_to_ndc(px, py, camera.width, camera.height))
    hit = ray_sphere_intersection(origin, direction, radius)
    if hit is None:
        logger.debug("Click at (%.1f, %.1f) missed the globe", px, py)
        return None
    if transform is not None:
        hit = to_local(transform, hit)
    return cartesian_to_lnglat(hit, radius)


def containing_features(point, candidates):
    return [f for f in candidates if is_selectable(f) and f.contains(point)]


def resolve_point(point, candidates):
    containing = containing_features(point, candidates)
    if not containing:
        return None
    if len(containing) == 1:
        return containing[0]
    winner = min(containing, key=lambda f: f.area)
    logger.debug("%d countries contain %s, smallest is %s",
                 len(containing), point, winner.iso)
    return winner


def resolve(px, py, camera, transform, candidates, radius=GLOBE_RADIUS):
    """Country under the pointer, or None for a miss or open ocean."""
    point = pick_lnglat(px, py, camera, transform, radius)
    if point is None:
        return None
    logger.debug("Click at (%.1f, %.1f) -> lng %.3f, lat %.3f", px, py, *point)
    return resolve_point(point, candidates)
