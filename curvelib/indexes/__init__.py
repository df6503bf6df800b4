"""Interest rate indexes."""

from .definitions import Estr, Euribor, Euribor3M, Euribor6M, Sofr, USDLibor
from .ibor import IborIndex, OvernightIndex

__all__ = [
    "IborIndex",
    "OvernightIndex",
    "Euribor",
    "Euribor3M",
    "Euribor6M",
    "USDLibor",
    "Sofr",
    "Estr",
]
