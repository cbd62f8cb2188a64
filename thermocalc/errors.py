"""Typed domain errors raised by the calculation functions.

All of them derive from ``ValueError`` so callers that already guard against
bad input with ``except ValueError`` keep working.
"""


class CalculationError(ValueError):
    """Base class for errors detected while computing a result."""

    kind = 'CalculationError'


class InvalidMaterial(CalculationError):
    """Raised when a layer has a non-positive conductivity or thickness."""

    kind = 'InvalidMaterial'


class EmptyAssembly(CalculationError):
    """Raised when a U-value is requested for an assembly without layers."""

    kind = 'EmptyAssembly'


class InvalidOrientation(CalculationError):
    """Raised when an orientation key has no yield factor."""

    kind = 'InvalidOrientation'


class InvalidPanel(CalculationError):
    """Raised when a panel spec has no usable power, area, price or efficiency."""

    kind = 'InvalidPanel'


class InfeasibleSizing(CalculationError):
    """Raised when the yield per installed watt is not positive and finite."""

    kind = 'InfeasibleSizing'


class InfeasiblePayback(CalculationError):
    """Raised when the array saves nothing per year, so it never pays back."""

    kind = 'InfeasiblePayback'
