import logging

from torchedt.config import DistanceTransformConfig
from torchedt.distance_transform import (
    distance_transform,
    euclidean_distance_3d,
    squared_distance_transform,
)
from torchedt.errors import (
    AllocationFailure,
    DistanceTransformError,
    InvalidInputKind,
    UnsupportedOutputKind,
)
from torchedt.repn import OutputRepn
from torchedt.volume import Volume

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
