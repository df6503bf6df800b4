"""Bootstrap framework for piecewise curve construction."""

from .base import BootstrapConfig, PillarChoice
from .iterative import IterativeBootstrap

__all__ = ["BootstrapConfig", "PillarChoice", "IterativeBootstrap"]
