"""Re-serialisation of loaded datasets."""

from claimload.export.csv import to_text_frame, write_csv

__all__ = ["to_text_frame", "write_csv"]
