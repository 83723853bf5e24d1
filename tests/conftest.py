import pytest

from sizecompare.registry import BoundaryRegistry


def square(x0, y0, size):
    return [[x0, y0], [x0 + size, y0], [x0 + size, y0 + size], [x0, y0 + size], [x0, y0]]


def feature(properties, geometry):
    return {"type": "Feature", "properties": properties, "geometry": geometry}


@pytest.fixture
def features():
    return [
        # Reference: two islands, the larger one with a lake
        feature({"NAME": "Indonesia"}, {
            "type": "MultiPolygon",
            "coordinates": [
                [square(96.0, -10.0, 8.0), square(98.0, -8.0, 2.0)],
                [square(130.0, -6.0, 10.0)],
            ],
        }),
        feature({"name": "Germany"}, {"type": "Polygon", "coordinates": [square(6.0, 47.0, 8.0)]}),
        feature({"NAME_EN": "Russia"}, {"type": "Polygon", "coordinates": [square(30.0, 45.0, 40.0)]}),
        feature({"NAME": "", "NAME_LONG": "Atlantis"}, {"type": "Polygon", "coordinates": [square(-30.0, 30.0, 2.0)]}),
        feature({"ISO": "XXX"}, {"type": "Polygon", "coordinates": [square(-40.0, 10.0, 1.0)]}),
        feature({"NAME": "Null Island"}, {"type": "Point", "coordinates": [0.0, 0.0]}),
    ]


@pytest.fixture
def areas():
    return {
        "Indonesia": 1904569,
        "Germany": 357114,
        "Russia": 17098246,
    }


@pytest.fixture
def registry(features, areas):
    return BoundaryRegistry.build(features, areas, reference="Indonesia")
