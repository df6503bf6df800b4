"""Bootstrap configuration."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from curvelib.errors import ValidationError
from curvelib.math.solvers import SOLVERS


class PillarChoice(Enum):
    """Which helper date becomes the curve node."""

    LAST_RELEVANT_DATE = "LAST_RELEVANT_DATE"
    MATURITY_DATE = "MATURITY_DATE"


@dataclass
class BootstrapConfig:
    """Configuration for bootstrap process.

    Attributes:
        accuracy: Solver accuracy per node, also the global-pass tolerance
        solver: Solver name, see ``curvelib.math.solvers.SOLVERS``
        max_bootstrap_passes: Pass limit; None uses the trait's default
        global_passes: None decides automatically (global interpolation or
            interdependent helpers); True forces repeated passes; False
            runs a single pass
        allow_extrapolation: Curve-wide extrapolation flag
        pillar_choice: Node date taken from each helper
        verbose: Log every node at INFO instead of DEBUG
    """

    accuracy: float = 1.0e-12
    solver: str = "BRENT"
    max_bootstrap_passes: Optional[int] = None
    global_passes: Optional[bool] = None
    allow_extrapolation: bool = False
    pillar_choice: PillarChoice = PillarChoice.LAST_RELEVANT_DATE
    verbose: bool = False

    def __post_init__(self):
        if not self.accuracy > 0.0:
            raise ValidationError(f"accuracy ({self.accuracy}) must be positive")
        if self.max_bootstrap_passes is not None and self.max_bootstrap_passes < 1:
            raise ValidationError(
                f"max_bootstrap_passes ({self.max_bootstrap_passes}) must be at least 1"
            )
        key = self.solver.upper().replace("-", "_").strip()
        if key not in SOLVERS:
            raise ValidationError(f"Unknown solver: {self.solver}. Available: {sorted(SOLVERS)}")
        if isinstance(self.pillar_choice, str):
            self.pillar_choice = PillarChoice(self.pillar_choice.upper())
