"""
Upload helpers.

Dependencies: None
System role: Uploaded filename normalisation
"""

from pathlib import PurePosixPath, PureWindowsPath

MAX_FILENAME_LENGTH = 255


def clean_filename(filename: str | None) -> str:
    """
    Strip any client-supplied directory part from an upload filename.

    Args:
        filename: Filename from the multipart part, possibly None

    Returns:
        str: Base name, empty if nothing usable remains
    """
    if not filename:
        return ""
    name = PureWindowsPath(PurePosixPath(filename).name).name.strip()
    if name in (".", ".."):
        return ""
    return name[:MAX_FILENAME_LENGTH]
