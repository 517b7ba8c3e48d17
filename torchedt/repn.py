import enum

import torch

from torchedt.errors import UnsupportedOutputKind


class OutputRepn(enum.Enum):
    """Pixel representation of the distance transform output."""

    FLOAT = "float"
    SHORT = "short"


def parse_repn(repn, float_dtype: torch.dtype = torch.float32, short_dtype: torch.dtype = torch.int16) -> OutputRepn:
    """Map an ``OutputRepn``, its name or its output dtype to an ``OutputRepn``.

    A dtype tag selects the representation whose configured output dtype it is.
    """
    if isinstance(repn, OutputRepn):
        return repn
    if isinstance(repn, torch.dtype):
        if repn == float_dtype:
            return OutputRepn.FLOAT
        if repn == short_dtype:
            return OutputRepn.SHORT
    elif isinstance(repn, str):
        try:
            return OutputRepn(repn.lower())
        except ValueError:
            pass
    raise UnsupportedOutputKind(
        f"Output repn must be either 'short' or 'float', got {repn!r}."
    )
