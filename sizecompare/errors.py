class SizeCompareError(Exception):
    """Base class for errors raised by the sizecompare package."""


class LoadError(SizeCompareError):
    """A boundary or area dataset could not be fetched, parsed or validated."""


class GeometryError(SizeCompareError, ValueError):
    """Geometry input that is neither a Polygon nor a MultiPolygon."""
