"""Axis passes of the separable 3D Euclidean distance transform.

Saito, T. and Toriwaki, J.-I. (1994). "New algorithms for euclidean distance
transformation of an n-dimensional digitized picture with applications",
Pattern Recognition 27(11), pp. 1551-1565.

Every pass works on all lanes of one axis at once. A pass reads the field of
the previous pass and returns a new one, it never writes to its input.
"""
import logging
from typing import Tuple

import torch

logger = logging.getLogger(__name__)


def nearest_foreground(mask: torch.Tensor, dim: int = -1) -> Tuple[torch.Tensor, torch.Tensor]:
    """Step counts to the nearest foreground voxel along ``dim``, forward and backward.

    For a voxel at index ``i`` of its lane, ``d1`` is the number of steps towards
    increasing indices until a foreground voxel is met and ``d2`` the same towards
    decreasing indices. Both are 0 on foreground voxels and are clamped to the
    lane length when the scan leaves the volume without meeting one.
    """
    dim = dim % mask.ndim
    n = mask.shape[dim]
    view = [1] * mask.ndim
    view[dim] = n
    index = torch.arange(n, device=mask.device).view(view).expand_as(mask).contiguous()

    ahead = index.masked_fill(~mask, n)
    next_fg = torch.flip(torch.cummin(torch.flip(ahead, [dim]), dim).values, [dim])
    d1 = (next_fg - index).masked_fill_(next_fg >= n, n)

    behind = index.masked_fill(~mask, -1)
    prev_fg = torch.cummax(behind, dim).values
    d2 = (index - prev_fg).masked_fill_(prev_fg < 0, n)
    return d1, d2


def column_pass(mask: torch.Tensor, sentinel: float, dtype: torch.dtype = torch.float64) -> torch.Tensor:
    """Squared distance to the nearest foreground voxel within the same row.

    Rows without any foreground voxel are filled with ``sentinel``.
    """
    d1, d2 = nearest_foreground(mask, dim=-1)
    d = torch.minimum(d1, d2).to(dtype)
    field = d * d
    empty = ~mask.any(dim=-1, keepdim=True)
    return field.masked_fill_(empty, sentinel)


def axis_min_pass(field: torch.Tensor, mask: torch.Tensor, dim: int, sentinel: float) -> torch.Tensor:
    """Minimise ``field[i] + (i - ii)**2`` over ``ii`` along ``dim`` for background voxels.

    The candidates of voxel ``i`` are restricted to ``|i - ii| <= floor(sqrt(field[i]))``:
    any ``ii`` farther away adds more than ``field[i]`` on its own. Results are
    clamped to ``sentinel``.
    """
    n = field.shape[dim]
    reach = torch.sqrt(field).floor_().clamp_(max=n - 1).to(torch.long)
    reach.masked_fill_(mask, 0)
    max_reach = int(reach.max())
    logger.debug("Minimising along dim %d of %s, window reach up to %d", dim, tuple(field.shape), max_reach)

    out = field.clone()
    for k in range(1, max_reach + 1):
        offset = float(k * k)
        width = n - k
        # voxels i whose candidate is i + k
        lo = out.narrow(dim, 0, width)
        candidate = torch.minimum(lo, field.narrow(dim, k, width) + offset)
        lo.copy_(torch.where(reach.narrow(dim, 0, width) >= k, candidate, lo))
        # voxels i whose candidate is i - k
        hi = out.narrow(dim, k, width)
        candidate = torch.minimum(hi, field.narrow(dim, 0, width) + offset)
        hi.copy_(torch.where(reach.narrow(dim, k, width) >= k, candidate, hi))
    return out.clamp_(max=sentinel)
