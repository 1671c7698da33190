"""
Unit tests for the containment matcher.

Covers strict inside/outside, boundary-inclusive edges and vertices, open
rings, degenerate rings and concave boundaries.
"""

import pytest

from modules.farm_device_mapper.spatial_query import (
    build_boundary_geometry, geometry_contains_point, point_in_boundary
)
from factories import SQUARE_A

# L-shaped farm: the square (1..2, 1..2) is cut out of (0..2, 0..2)
L_SHAPE = [(0, 0), (0, 2), (1, 2), (1, 1), (2, 1), (2, 0), (0, 0)]


class TestPointInBoundary:
    """Test suite for point_in_boundary."""
    
    @pytest.mark.parametrize("point", [(1, 1), (0.5, 1.5), (1.999, 0.001)])
    def test_strictly_inside(self, point):
        assert point_in_boundary(point, SQUARE_A) is True
    
    @pytest.mark.parametrize("point", [(10, 10), (3, 1), (-0.001, 1), (1, 2.0001)])
    def test_strictly_outside(self, point):
        assert point_in_boundary(point, SQUARE_A) is False
    
    @pytest.mark.parametrize("point", [(0, 1), (1, 2), (2, 1), (1, 0)])
    def test_on_edge_is_contained(self, point):
        assert point_in_boundary(point, SQUARE_A) is True
    
    @pytest.mark.parametrize("point", [(0, 0), (0, 2), (2, 2), (2, 0)])
    def test_on_vertex_is_contained(self, point):
        assert point_in_boundary(point, SQUARE_A) is True
    
    def test_concave_notch_is_outside(self):
        assert point_in_boundary((1.5, 1.5), L_SHAPE) is False
        assert point_in_boundary((0.5, 1.5), L_SHAPE) is True
        assert point_in_boundary((1.5, 0.5), L_SHAPE) is True
    
    def test_open_ring_is_closed_implicitly(self):
        open_ring = SQUARE_A[:-1]
        
        assert point_in_boundary((1, 1), open_ring) is True
        assert point_in_boundary((0, 1), open_ring) is True
    
    def test_coordinate_order_is_not_swapped(self):
        # Tall thin rectangle: lat 0..10, lng 0..1
        rectangle = [(0, 0), (10, 0), (10, 1), (0, 1), (0, 0)]
        
        assert point_in_boundary((5, 0.5), rectangle) is True
        assert point_in_boundary((0.5, 5), rectangle) is False
    
    @pytest.mark.parametrize("boundary", [
        [],
        [(1, 1)],
        [(0, 0), (2, 2)],
        [(0, 0), (2, 2), (0, 0)],
    ])
    def test_degenerate_boundary_contains_nothing(self, boundary):
        assert point_in_boundary((0, 0), boundary) is False
        assert point_in_boundary((1, 1), boundary) is False


class TestBoundaryGeometry:
    """Test suite for the prepared geometry helpers."""
    
    def test_geometry_reused_for_many_points(self):
        geometry = build_boundary_geometry(SQUARE_A)
        
        assert geometry is not None
        assert geometry_contains_point(geometry, (1, 1))
        assert geometry_contains_point(geometry, (2, 2))
        assert not geometry_contains_point(geometry, (5, 5))
    
    def test_degenerate_geometry_is_none(self):
        assert build_boundary_geometry([(0, 0), (1, 1)]) is None
        assert geometry_contains_point(None, (0, 0)) is False
