"""Numerical building blocks: solvers, time grids and running statistics."""

from .solvers import create_solver
from .statistics import IncrementalStatistics
from .timegrid import TimeGrid

__all__ = ["IncrementalStatistics", "TimeGrid", "create_solver"]
