import torch


class DistanceTransformError(Exception):
    """Base class for every error raised by torchedt."""


class InvalidInputKind(DistanceTransformError, TypeError):
    """Input volume is not a 3D single-bit (``torch.bool``) tensor."""


class UnsupportedOutputKind(DistanceTransformError, ValueError):
    """Requested output representation is neither ``float`` nor ``short``."""


class AllocationFailure(DistanceTransformError, MemoryError):
    """A destination or working buffer could not be allocated."""


# the CPU allocator reports exhaustion as a plain RuntimeError
_OOM_MESSAGES = ("can't allocate memory", "out of memory")


def is_out_of_memory(exc: BaseException) -> bool:
    """Whether ``exc`` is torch (or Python) reporting an exhausted allocator."""
    if isinstance(exc, (MemoryError, torch.cuda.OutOfMemoryError)):
        return True
    message = str(exc).lower()
    return isinstance(exc, RuntimeError) and any(text in message for text in _OOM_MESSAGES)
