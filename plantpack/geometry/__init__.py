from .polygon import (
    points_equal,
    distinct_vertex_count,
    is_degenerate,
    polygon_area,
    polygon_bounds,
    polygon_centroid,
    point_in_polygon,
    signed_distance_to_boundary,
    validate_outline,
)
