"""
Abstract base class for process strategies.

A strategy pairs an inlet with a target (power, temperature, RH, ...).
Preconditions are checked in the constructor, so an invalid target never
reaches the equations or the solver.
"""

from abc import ABC, abstractmethod

from hvacengine.models.flow import FlowOfMoistAir


class ProcessStrategy(ABC):
    """Base class for all process strategies."""

    def __init__(self, inlet_air_flow: FlowOfMoistAir):
        self.inlet_air_flow = inlet_air_flow

    @abstractmethod
    def solve(self):
        """Solve the process and return its ProcessResult."""
        ...
