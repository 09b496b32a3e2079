"""
This package contains the geometry of single elements as seen by the box method.

Each vertex of an element owns a sub-control volume, bounded inside the element by the
sub-control volume faces that connect the edge midpoints with the element barycenter.
Facets on the domain boundary are split into one boundary face per adjacent vertex.
"""
