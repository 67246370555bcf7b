"""Issuer-specific parser refinements.

Each refinement extends GenericParser and declares only what's different
for that issuer (detection rule, labels, card formats, date quirks).
"""

from .amex import AmexParser
from .axis import AxisParser
from .hdfc import HDFCParser
from .icici import ICICIParser
from .sbi import SBIParser

__all__ = ["HDFCParser", "ICICIParser", "SBIParser", "AxisParser", "AmexParser"]
