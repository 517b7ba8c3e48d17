import logging
from typing import Optional, Union

import torch

from torchedt.config import DistanceTransformConfig
from torchedt.errors import AllocationFailure, InvalidInputKind, is_out_of_memory
from torchedt.finalize import ScaledRoundFinalizer, SqrtFinalizer
from torchedt.passes import axis_min_pass, column_pass
from torchedt.repn import OutputRepn, parse_repn
from torchedt.volume import Volume, copy_attrs, select_dest

logger = logging.getLogger(__name__)

VolumeLike = Union[torch.Tensor, Volume]
Finalizer = Union[SqrtFinalizer, ScaledRoundFinalizer]


def _binary_tensor(input: VolumeLike) -> torch.Tensor:
    tensor = input.data if isinstance(input, Volume) else input
    if not isinstance(tensor, torch.Tensor):
        raise InvalidInputKind(f"Input volume must be a torch.Tensor, got {type(tensor).__name__}.")
    if tensor.dtype != torch.bool:
        raise InvalidInputKind(f"Input volume must be of type bit (torch.bool), got {tensor.dtype}.")
    if tensor.ndim != 3 or tensor.numel() == 0:
        raise InvalidInputKind(f"Invalid input dimension: {tuple(tensor.shape)}.")
    return tensor


def _squared_distance(mask: torch.Tensor, config: DistanceTransformConfig) -> torch.Tensor:
    nbands, nrows, ncols = mask.shape
    sentinel = float(nbands * nbands + nrows * nrows + ncols * ncols)

    try:
        field = column_pass(mask, sentinel, config.work_dtype)
        field = axis_min_pass(field, mask, dim=1, sentinel=sentinel)
        field = axis_min_pass(field, mask, dim=0, sentinel=sentinel)
    except (RuntimeError, MemoryError) as exc:
        if not is_out_of_memory(exc):
            raise
        raise AllocationFailure(
            f"Cannot allocate working buffers for a volume of shape {tuple(mask.shape)}."
        ) from exc
    return field


def squared_distance_transform(
    input: VolumeLike, config: Optional[DistanceTransformConfig] = None
) -> torch.Tensor:
    """Squared Euclidean distance of every voxel to the nearest foreground voxel.

    Three passes: distances within each row (column axis), then minimised over
    the rows of each band, then over the bands. If the volume holds no foreground
    voxel at all, every voxel gets ``nbands**2 + nrows**2 + ncols**2``.
    """
    return _squared_distance(_binary_tensor(input), config or DistanceTransformConfig())


def _euclidean_distance(
    input: VolumeLike,
    mask: torch.Tensor,
    dest: Optional[VolumeLike],
    finalizer: Finalizer,
    config: DistanceTransformConfig,
) -> VolumeLike:
    field = _squared_distance(mask, config)

    out = select_dest(dest, mask.shape, finalizer.dtype, mask.device)
    finalizer(field, out)
    logger.debug("Finalised %s distance transform of shape %s", finalizer.repn.value, tuple(mask.shape))

    if not isinstance(input, Volume):
        return out
    if isinstance(dest, Volume) and dest.data is out:
        result = dest
    else:
        result = Volume(out)
    return copy_attrs(input, result)


def euclidean_distance_3d(
    input: VolumeLike,
    dest: Optional[VolumeLike],
    finalizer: Finalizer,
    config: Optional[DistanceTransformConfig] = None,
) -> VolumeLike:
    """Distance transform of ``input`` written into ``dest`` through ``finalizer``.

    ``dest`` is reused when its shape, dtype and device fit, otherwise a new
    buffer is allocated. A ``Volume`` input gives a ``Volume`` result carrying a
    copy of the input attributes.
    """
    mask = _binary_tensor(input)
    return _euclidean_distance(input, mask, dest, finalizer, config or DistanceTransformConfig())


def distance_transform(
    input: VolumeLike,
    dest: Optional[VolumeLike] = None,
    repn=OutputRepn.FLOAT,
    config: Optional[DistanceTransformConfig] = None,
) -> VolumeLike:
    """3D Euclidean distance transform of a binary volume.

    Args:
        input: ``torch.bool`` tensor or ``Volume`` of shape (bands, rows, columns).
            ``True`` marks foreground voxels.
        dest: optional destination, reused when compatible.
        repn: ``"float"`` for distances in voxel units or ``"short"`` for
            distances multiplied by 10 and rounded. ``OutputRepn`` members and the
            configured output dtypes (``torch.float32`` / ``torch.int16`` by
            default) are accepted too.
        config: output dtypes, fixed-point scale and working precision.

    Raises:
        InvalidInputKind: ``input`` is not a non-empty 3D bit volume.
        UnsupportedOutputKind: ``repn`` is neither float nor short.
        AllocationFailure: a buffer could not be allocated.
    """
    mask = _binary_tensor(input)
    config = config or DistanceTransformConfig()
    config.validate()
    repn = parse_repn(repn, config.float_dtype, config.short_dtype)

    if repn is OutputRepn.SHORT:
        finalizer = ScaledRoundFinalizer(config.scale, config.short_dtype)
    else:
        finalizer = SqrtFinalizer(config.float_dtype)
    return _euclidean_distance(input, mask, dest, finalizer, config)
