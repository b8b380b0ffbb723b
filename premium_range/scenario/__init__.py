"""Scenario engine: input parsing, validation and limit-compounding bounds.

- parsing.py: lenient number parsing for form/JSON input
- inputs.py: per-field policy table, CalcInput and the error model
- engine.py: CalcResult and the calculate() entry point
- notes.py: advisory note selection
- cli.py: command-line wrapper
"""

from premium_range.scenario.engine import CalcResult, calculate, compute
from premium_range.scenario.inputs import CalcInput, ErrorKind, ValidationError

__all__ = ["CalcInput", "CalcResult", "ErrorKind", "ValidationError", "calculate", "compute"]
