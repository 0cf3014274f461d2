"""3D Voronoi cells as POLYHEDRALSURFACE well-known text."""

from .voronoi import compute_voronoi

__all__ = ["compute_voronoi", "cell", "container", "engine", "export", "faces", "parameters", "pipeline", "vec3", "wkt"]
