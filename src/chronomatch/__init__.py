"""chronomatch - fuzzy date/time expression extraction

Finds expressions such as "next friday", "5 p.m." or "tomorow" in free text
and turns them into tokens, spans and a derived time shift.
"""

__version__ = "0.1.0"
__description__ = "Fuzzy date/time expression extraction"

from .processors.core.temporal_extractor import TemporalExtractor, extract
from .processors.core.tokens import Match, TimeShift

__all__ = ["TemporalExtractor", "extract", "Match", "TimeShift"]
