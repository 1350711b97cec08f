import numpy as np
import pytest

from octree_bench.model.models import AABB3D, Point3D

STORAGES = ["array", "map", "linear"]


@pytest.fixture
def bounds():
    return AABB3D.of((-10, -10, -10), (10, 10, 10))


@pytest.fixture
def random_cloud(bounds):
    rng = np.random.default_rng(1234)
    arr = rng.uniform(-10, 10, size=(300, 3))
    return [Point3D(float(x), float(y), float(z)) for x, y, z in arr]


@pytest.fixture(params=STORAGES)
def storage(request):
    return request.param
