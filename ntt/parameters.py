from dataclasses import dataclass

from .constants import NAIVE_THRESHOLD


@dataclass(frozen=True)
class ConvolutionParameters:
    # shorter input length at or below which the naive product is used
    naive_threshold: int = NAIVE_THRESHOLD
    # check integer convolution magnitude bounds instead of wrapping silently
    strict: bool = False


DEFAULT_PARAMETERS = ConvolutionParameters()
