"""
Gradebook Service Libraries Package.

Shared infrastructure for grading services: structured logging, structured
error handling and the Result type.
"""

from .result import Result

__all__ = ["Result"]
