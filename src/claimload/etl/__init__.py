"""
Load pipeline: discovery, parsing, concatenation and derivation.
"""

from claimload.etl.concat import concatenate
from claimload.etl.pipeline import LoadPipeline, LoadResult, run_load

__all__ = ["LoadPipeline", "LoadResult", "concatenate", "run_load"]
