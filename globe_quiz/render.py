"""
Draws the globe into a PIL image through the same camera and globe transform
the resolver uses, so a pixel on the picture picks the country drawn there.
"""

import colorsys
import io
import math

import numpy as np
from matplotlib.figure import Figure
from matplotlib.patches import Circle
from PIL import Image

from globe_quiz.config import GLOBE_RADIUS
from globe_quiz.geometry import lnglat_to_cartesian
from globe_quiz.resolver import to_world

DPI = 100
SPACE_COLOR = "#0b0b1a"
OCEAN_COLOR = "#1d3b5c"
BORDER_COLOR = "#333333"
SELECTED_COLOR = "#ffd43b"
# polygons sit slightly above the ocean sphere
POLYGON_ALTITUDE = 1.002


def iso_to_color(iso):
    h = 0
    for ch in iso:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    hue = (h % 360) / 360
    saturation = (55 + h % 25) / 100
    lightness = (45 + (h >> 8) % 15) / 100
    return colorsys.hls_to_rgb(hue, lightness, saturation)


def _ring_to_world(coords, transform, radius):
    coords = np.asarray(coords, dtype=float)
    local = lnglat_to_cartesian(coords[:, 0], coords[:, 1], radius * POLYGON_ALTITUDE)
    return to_world(transform, local.T)


def clip_to_horizon(world, centre, eye, radius):
    """
    Cut a closed 3D ring on the sphere down to the part the eye can see.

    The visible cap is bounded by the plane through the horizon circle, so this
    is one Sutherland-Hodgman pass against that plane. Crossing points are
    pushed back onto the sphere. Returns an (M, 3) array; M < 3 means nothing
    is visible.
    """
    offset = np.asarray(eye, dtype=float) - centre
    dist = np.linalg.norm(offset)
    normal = offset / dist
    # signed height above the horizon plane, > 0 on the visible side
    height = (world - centre) @ normal - radius * radius / dist

    clipped = []
    count = len(world)
    for i in range(count):
        a, b = world[i], world[(i + 1) % count]
        ha, hb = height[i], height[(i + 1) % count]
        if ha > 0:
            clipped.append(a)
        if (ha > 0) != (hb > 0):
            p = a + ha / (ha - hb) * (b - a) - centre
            clipped.append(centre + p * radius / np.linalg.norm(p))
    return np.asarray(clipped, dtype=float).reshape(-1, 3)


def _draw_globe_disk(ax, camera, transform, radius):
    centre = to_world(transform, np.zeros(3))
    screen = camera.project(centre)
    if screen is None:
        return
    dist = float(np.linalg.norm(np.asarray(camera.position) - centre))
    half_angle = math.asin(min(1.0, radius / dist))
    r_px = math.tan(half_angle) / math.tan(math.radians(camera.fov) / 2) * camera.height / 2
    ax.add_patch(Circle(screen, r_px, color=OCEAN_COLOR, zorder=0))


def render_globe(features, camera, transform=None, selected_iso=None, radius=GLOBE_RADIUS):
    transform = np.eye(4) if transform is None else np.asarray(transform, dtype=float)
    centre = to_world(transform, np.zeros(3))

    fig = Figure(figsize=(camera.width / DPI, camera.height / DPI), dpi=DPI)
    fig.patch.set_facecolor(SPACE_COLOR)
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, camera.width)
    ax.set_ylim(camera.height, 0)
    ax.set_facecolor(SPACE_COLOR)
    ax.axis("off")

    _draw_globe_disk(ax, camera, transform, radius)

    for feature in features:
        selected = feature.iso == selected_iso
        face = SELECTED_COLOR if selected else iso_to_color(feature.iso)
        edge = "white" if selected else BORDER_COLOR
        for polygon in feature.polygons():
            world = _ring_to_world(polygon.exterior.coords, transform, radius)
            front = clip_to_horizon(world, centre, camera.position, radius * POLYGON_ALTITUDE)
            if len(front) < 3:
                continue
            px, py, depth = camera.project_points(front)
            if (depth <= 0).any():
                continue
            ax.fill(px, py, facecolor=face, edgecolor=edge,
                    linewidth=1.5 if selected else 0.4, zorder=2 if selected else 1)

    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=DPI, facecolor=fig.get_facecolor())
    buf.seek(0)
    return Image.open(buf).convert("RGB")
