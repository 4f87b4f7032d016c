"""
Claimload: Batch Table Loader for Claim Transactions.

This package discovers CSV and Excel files, parses them against an explicit
column schema, stacks them into one dataset and derives computed fields.
"""

from importlib.metadata import version

__version__ = version("claimload")

__all__ = ["__version__"]
