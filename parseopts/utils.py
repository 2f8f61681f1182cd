# parseopts/utils.py
"""
parseopts.utils
---------------

Shared utility functions for path handling.
"""

import os
from typing import Optional


def expand_path(path: Optional[str]) -> Optional[str]:
    """Expand ~ and environment variables in a path string.

    Args:
        path: Path string to expand, or None.

    Returns:
        Expanded path string, or None if input was None.

    Examples:
        >>> expand_path("~/specs/tools.toml")
        '/home/user/specs/tools.toml'
        >>> expand_path(None)
        None
    """
    if path is None:
        return None
    return os.path.expandvars(os.path.expanduser(str(path)))
