class ConvolutionError(Exception):
    """Base class for errors raised by the convolution engine."""


class UnsupportedModulusError(ConvolutionError, ValueError):
    """No primitive root is known for the requested modulus."""

    def __init__(self, modulus: int):
        self.modulus = modulus
        super().__init__(f"no primitive root is available for modulus {modulus}")


class PreconditionError(ConvolutionError, ValueError):
    """Input violates a documented precondition (length, magnitude bound)."""
