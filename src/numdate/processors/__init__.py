"""Data Processing Module

Processors turning raw text into structured temporal values.
"""

from .core.disambiguation_engine import DateDisambiguationEngine, default_engine, new_engine

__all__ = [
    "DateDisambiguationEngine",
    "default_engine",
    "new_engine"
]
