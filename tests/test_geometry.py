import math

import numpy as np
import pytest
from shapely.geometry import MultiPolygon, Polygon, box

from globe_quiz.config import GLOBE_RADIUS
from globe_quiz.geometry import (
    cartesian_to_lnglat,
    geometry_area,
    lnglat_to_cartesian,
    point_in_geometry,
    point_in_polygon,
    point_in_ring,
    polygon_area,
    ray_sphere_intersection,
    ring_area,
)


class TestSphericalProjection:
    def test_origin_of_coordinates_faces_plus_z(self):
        assert lnglat_to_cartesian(0, 0) == pytest.approx(np.array([0, 0, GLOBE_RADIUS]), abs=1e-9)

    def test_lng_90_faces_plus_x(self):
        assert lnglat_to_cartesian(90, 0) == pytest.approx(np.array([GLOBE_RADIUS, 0, 0]), abs=1e-9)

    def test_north_pole_is_plus_y(self):
        assert lnglat_to_cartesian(0, 90) == pytest.approx(np.array([0, GLOBE_RADIUS, 0]), abs=1e-9)

    @pytest.mark.parametrize("lng, lat", [(0, 0), (13.4, 52.5), (-74.0, 40.7), (151.2, -33.9), (-120, -60)])
    def test_inverse_recovers_lnglat(self, lng, lat):
        assert cartesian_to_lnglat(lnglat_to_cartesian(lng, lat)) == pytest.approx((lng, lat), abs=1e-9)

    def test_date_line_stays_continuous(self):
        east, _ = cartesian_to_lnglat(lnglat_to_cartesian(179, 0))
        west, _ = cartesian_to_lnglat(lnglat_to_cartesian(-179, 0))
        assert east == pytest.approx(179)
        assert west == pytest.approx(-179)

    def test_longitude_is_normalized(self):
        for lng in np.linspace(-180, 180, 37):
            result, _ = cartesian_to_lnglat(lnglat_to_cartesian(lng, 10))
            assert -180 <= result <= 180

    def test_point_off_the_surface_uses_its_own_radius(self):
        p = lnglat_to_cartesian(25, -10, radius=GLOBE_RADIUS * 1.5)
        assert cartesian_to_lnglat(p) == pytest.approx((25, -10))

    def test_vectorized_matches_scalar(self):
        many = lnglat_to_cartesian(np.array([10.0, -45.0]), np.array([20.0, 5.0]))
        assert many.shape == (3, 2)
        assert many[:, 1] == pytest.approx(lnglat_to_cartesian(-45, 5))


class TestRaySphere:
    def test_hits_front_of_sphere(self):
        hit = ray_sphere_intersection([0, 0, 350], [0, 0, -1])
        assert hit == pytest.approx(np.array([0, 0, GLOBE_RADIUS]))

    def test_direction_need_not_be_unit(self):
        hit = ray_sphere_intersection([0, 0, 350], [0, 0, -20])
        assert hit == pytest.approx(np.array([0, 0, GLOBE_RADIUS]))

    def test_miss_returns_none(self):
        assert ray_sphere_intersection([0, 150, 350], [0, 0, -1]) is None

    def test_sphere_behind_ray_returns_none(self):
        assert ray_sphere_intersection([0, 0, 350], [0, 0, 1]) is None

    def test_origin_inside_sphere_hits_far_side(self):
        hit = ray_sphere_intersection([0, 0, 0], [1, 0, 0])
        assert hit == pytest.approx(np.array([GLOBE_RADIUS, 0, 0]))

    def test_grazing_ray_touches_sphere(self):
        hit = ray_sphere_intersection([GLOBE_RADIUS, 0, 350], [0, 0, -1])
        assert hit == pytest.approx(np.array([GLOBE_RADIUS, 0, 0]), abs=1e-6)

    def test_hit_lies_on_sphere(self):
        hit = ray_sphere_intersection([30, -20, 300], [-0.1, 0.05, -1])
        assert math.isclose(np.linalg.norm(hit), GLOBE_RADIUS)


class TestPointInPolygon:
    ring = [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]

    def test_inside_ring(self):
        assert point_in_ring((5, 5), self.ring)

    def test_outside_ring(self):
        assert not point_in_ring((15, 5), self.ring)

    def test_boundary_counts_as_inside(self):
        assert point_in_ring((10, 5), self.ring)

    def test_degenerate_ring(self):
        assert not point_in_ring((0, 0), [(0, 0), (1, 1)])

    def test_hole_is_not_inside(self):
        donut = Polygon(self.ring, [[(4, 4), (6, 4), (6, 6), (4, 6), (4, 4)]])
        assert not point_in_geometry((5, 5), donut)
        assert point_in_geometry((2, 2), donut)

    def test_hole_edge_counts_as_inside(self):
        donut = Polygon(self.ring, [[(4, 4), (6, 4), (6, 6), (4, 6), (4, 4)]])
        assert point_in_polygon((4, 5), donut)

    def test_any_polygon_of_multipolygon(self):
        islands = MultiPolygon([box(0, 0, 1, 1), box(20, 20, 21, 21)])
        assert point_in_geometry((20.5, 20.5), islands)
        assert point_in_geometry((0.5, 0.5), islands)
        assert not point_in_geometry((10, 10), islands)


class TestArea:
    def test_ring_area_ignores_orientation(self):
        assert ring_area([(0, 0), (2, 0), (2, 2), (0, 2)]) == pytest.approx(4)
        assert ring_area([(0, 0), (0, 2), (2, 2), (2, 0)]) == pytest.approx(4)

    def test_multipolygon_area_is_summed(self):
        islands = MultiPolygon([box(0, 0, 1, 1), box(5, 5, 7, 7)])
        assert geometry_area(islands) == pytest.approx(5)

    def test_holes_are_subtracted(self):
        donut = Polygon([(0, 0), (4, 0), (4, 4), (0, 4)], [[(1, 1), (2, 1), (2, 2), (1, 2)]])
        assert polygon_area(donut) == pytest.approx(15)
        assert geometry_area(donut) == pytest.approx(donut.area)

    def test_degenerate_ring_has_no_area(self):
        assert ring_area([(0, 0), (1, 1)]) == 0.0
