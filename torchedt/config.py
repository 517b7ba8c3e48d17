"""Configuration for the 3D Euclidean distance transform."""

from dataclasses import dataclass
from typing import Dict

import torch


@dataclass
class DistanceTransformConfig:
    """Output encodings and working precision of the distance transform."""

    # fixed-point factor of the ``short`` encoding (one decimal digit)
    scale: float = 10.0
    float_dtype: torch.dtype = torch.float32
    short_dtype: torch.dtype = torch.int16
    # squared distances are integers, float64 holds them exactly up to 2**53
    work_dtype: torch.dtype = torch.float64

    def validate(self) -> None:
        """Validate configuration values."""
        if not self.scale > 0:
            raise ValueError("scale must be > 0")
        if not self.float_dtype.is_floating_point:
            raise ValueError("float_dtype must be a floating point dtype")
        if self.short_dtype.is_floating_point or self.short_dtype.is_complex or self.short_dtype == torch.bool:
            raise ValueError("short_dtype must be an integer dtype")
        if not self.work_dtype.is_floating_point:
            raise ValueError("work_dtype must be a floating point dtype")

    def to_dict(self) -> Dict[str, object]:
        """Return a JSON-serializable dict."""
        return {
            "scale": self.scale,
            "float_dtype": str(self.float_dtype),
            "short_dtype": str(self.short_dtype),
            "work_dtype": str(self.work_dtype),
        }
