import torch

from torchedt.repn import OutputRepn


class SqrtFinalizer:
    """Real-valued distance: the square root of the squared-distance field."""

    repn = OutputRepn.FLOAT

    def __init__(self, dtype: torch.dtype = torch.float32):
        self.dtype = dtype

    def __call__(self, field: torch.Tensor, out: torch.Tensor) -> torch.Tensor:
        return out.copy_(torch.sqrt(field))


class ScaledRoundFinalizer:
    """Fixed-point distance: ``scale * sqrt(field)`` rounded half away from zero.

    Values beyond the range of ``dtype`` saturate at its bounds.
    """

    repn = OutputRepn.SHORT

    def __init__(self, scale: float = 10.0, dtype: torch.dtype = torch.int16):
        self.scale = scale
        self.dtype = dtype

    def __call__(self, field: torch.Tensor, out: torch.Tensor) -> torch.Tensor:
        info = torch.iinfo(self.dtype)
        # field >= 0, so floor(x + 0.5) rounds ties away from zero
        value = torch.floor(self.scale * torch.sqrt(field) + 0.5)
        return out.copy_(value.clamp_(info.min, info.max))
