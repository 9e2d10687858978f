"""Exception types raised by mlkernels.

All errors derive from ValueError so callers catching ValueError keep working.
"""


class ArgumentError(ValueError):
    """A kernel parameter lies outside its documented domain.

    Parameters
    ----------
    kernel_name : str
        Name of the kernel family being constructed
    parameter : str
        Name of the offending parameter
    value : object
        The rejected value
    constraint : str
        Human readable constraint, e.g. ``"α > 0"``
    """

    def __init__(self, kernel_name: str, parameter: str, value, constraint: str):
        self.kernel_name = kernel_name
        self.parameter = parameter
        self.value = value
        self.constraint = constraint
        super().__init__(
            f"{kernel_name}: {parameter} = {value} violates {constraint}"
        )


class DimensionMismatch(ValueError):
    """Array shapes are incompatible with the requested operation."""


class NystromDegenerateError(ValueError):
    """No eigenpair of the sampled kernel matrix survived the tolerance.

    The sample is too degenerate; retry with a different or larger sample.
    """
