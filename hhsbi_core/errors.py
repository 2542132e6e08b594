"""
Exception and warning classes for the HH simulator.

Exception Hierarchy:
    HHSimulatorError (base)
    └── InvalidArgumentError - bad inputs rejected before integration starts

Warnings:
    NumericDegeneracyWarning - trace contains NaN/Inf (values are not corrected)
"""


class HHSimulatorError(Exception):
    """Base exception for all simulator-specific errors."""


class InvalidArgumentError(HHSimulatorError, ValueError):
    """
    Invalid simulation arguments.

    Raised up front for non-positive dt or tfin, a current trace shorter than
    the number of output samples, malformed parameter vectors or seeds.
    """


class NumericDegeneracyWarning(RuntimeWarning):
    """The simulated voltage trace contains non-finite values."""
