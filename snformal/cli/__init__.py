"""
Command-line interface for SN-Formal.
"""

from snformal.cli.main import main

__all__ = ["main"]
