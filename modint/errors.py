class ModIntError(ArithmeticError):
    """Base class for modular arithmetic errors."""


class ModulusMismatchError(ModIntError, ValueError):
    """Operands belong to different moduli."""


class NotInvertibleError(ModIntError, ZeroDivisionError):
    """The value shares a factor with the modulus and has no inverse."""
