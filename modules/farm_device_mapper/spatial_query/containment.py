"""Containment Matcher

Boundary-inclusive point-in-polygon test over farm boundary rings. Points and
rings use the same (lat, lng) vertex order, so no axis swap is applied.
"""

from typing import Optional, Sequence

from shapely.geometry import Point, Polygon
from shapely.prepared import PreparedGeometry, prep

from ..models import Coordinate


def build_boundary_geometry(boundary: Sequence[Coordinate]) -> Optional[PreparedGeometry]:
    """Build a prepared polygon for repeated containment tests.
    
    Open rings are closed implicitly. A boundary with fewer than three
    distinct vertices encloses nothing and yields None.
    
    Args:
        boundary: Ordered ring of (lat, lng) vertices
        
    Returns:
        Prepared polygon, or None for a degenerate boundary
    """
    vertices = [(float(lat), float(lng)) for lat, lng in boundary]
    if len(set(vertices)) < 3:
        return None
    return prep(Polygon(vertices))


def geometry_contains_point(geometry: Optional[PreparedGeometry], point: Coordinate) -> bool:
    """Test a point against a geometry from ``build_boundary_geometry``.
    
    ``covers`` is used instead of ``contains`` so points on an edge or
    vertex count as inside.
    """
    if geometry is None:
        return False
    return geometry.covers(Point(point))


def point_in_boundary(point: Coordinate, boundary: Sequence[Coordinate]) -> bool:
    """Check whether a point lies inside or on the edge of a boundary ring.
    
    Args:
        point: (lat, lng) position
        boundary: Ordered ring of (lat, lng) vertices
        
    Returns:
        True if the point is inside the polygon or on its boundary
    """
    return geometry_contains_point(build_boundary_geometry(boundary), point)
