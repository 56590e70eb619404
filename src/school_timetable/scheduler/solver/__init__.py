"""Constraint model pieces for the CP-SAT generator."""

from .builder import ModelBuilder
from .extractor import SolutionExtractor

__all__ = [
    "ModelBuilder",
    "SolutionExtractor",
]
