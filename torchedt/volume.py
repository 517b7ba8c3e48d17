import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

import torch

from torchedt.errors import AllocationFailure, is_out_of_memory

logger = logging.getLogger(__name__)


@dataclass
class Volume:
    """A 3D voxel tensor indexed (band, row, column) with descriptive attributes.

    ``attrs`` holds metadata such as orientation or voxel spacing. torchedt never
    interprets it, it only carries it from the input volume to the output.
    """

    data: torch.Tensor
    attrs: Dict[str, Any] = field(default_factory=dict)

    @property
    def shape(self) -> Tuple[int, ...]:
        return tuple(self.data.shape)


def _tensor_of(volume: Union[torch.Tensor, Volume, None]) -> Optional[torch.Tensor]:
    if isinstance(volume, Volume):
        return volume.data
    return volume


def select_dest(
    dest: Union[torch.Tensor, Volume, None],
    shape: Tuple[int, ...],
    dtype: torch.dtype,
    device: torch.device,
) -> torch.Tensor:
    """Return ``dest`` if it can hold the result, otherwise a freshly allocated tensor.

    A destination is reused only when its shape, dtype and device all match. The
    returned tensor's contents are unspecified and are overwritten by the caller.
    """
    tensor = _tensor_of(dest)
    if tensor is not None:
        if tuple(tensor.shape) == tuple(shape) and tensor.dtype == dtype and tensor.device == device:
            logger.debug("Reusing destination %s %s on %s", tuple(shape), dtype, device)
            return tensor
        logger.debug(
            "Destination %s %s on %s does not match %s %s on %s, allocating",
            tuple(tensor.shape), tensor.dtype, tensor.device, tuple(shape), dtype, device,
        )
    try:
        return torch.empty(shape, dtype=dtype, device=device)
    except (RuntimeError, MemoryError) as exc:
        if not is_out_of_memory(exc):
            raise
        raise AllocationFailure(
            f"Cannot allocate destination of shape {tuple(shape)} and dtype {dtype} on {device}."
        ) from exc


def copy_attrs(src: Union[torch.Tensor, Volume], dest: Volume) -> Volume:
    """Replace the attributes of ``dest`` with a copy of the attributes of ``src``."""
    dest.attrs = dict(src.attrs) if isinstance(src, Volume) else {}
    return dest
