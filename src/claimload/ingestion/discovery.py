"""
Input file discovery.

Lists the files of one directory that match a filename suffix.
"""

from pathlib import Path

from claimload.errors import DirectoryNotFound
from claimload.utils.logging import get_logger

log = get_logger(__name__)


def discover_files(
    directory: Path | str,
    suffix: str | tuple[str, ...] = ".csv",
) -> list[Path]:
    """
    Find files directly inside a directory whose names end with a suffix.

    Matching is case-insensitive. The result is sorted by file name, so
    repeated calls over the same directory contents return the same order.

    Args:
        directory: Directory to search (not recursive).
        suffix: Suffix or tuple of suffixes, e.g. ".csv" or (".xlsx", ".xlsm").

    Returns:
        Matching file paths, possibly empty.

    Raises:
        DirectoryNotFound: If the directory does not exist.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise DirectoryNotFound(directory)

    suffixes = (suffix,) if isinstance(suffix, str) else tuple(suffix)
    suffixes = tuple(s.lower() for s in suffixes)

    matches = sorted(
        (
            path
            for path in directory.iterdir()
            if path.is_file() and path.name.lower().endswith(suffixes)
        ),
        key=lambda path: path.name,
    )

    if matches:
        log.info(
            "Discovered files",
            directory=str(directory),
            suffix=list(suffixes),
            files=len(matches),
        )
    else:
        log.warning(
            "No files matched", directory=str(directory), suffix=list(suffixes)
        )
    return matches
