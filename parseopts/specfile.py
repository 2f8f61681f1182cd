# parseopts/specfile.py
"""
parseopts.specfile
------------------

Load option specs from TOML or JSON files.

A file either describes one spec at its root::

    optstring = "ab:f:v"
    min_args = 1
    max_args = 2
    usage = "foo [-a] [-b B] [-f F] [-v] SRC [DST]"

or several named specs under a ``specs`` table::

    [specs.deploy]
    optstring = "nf:"
    usage = "deploy [-n] [-f FILE]"

TOML has no null, so an absent ``max_args`` means unbounded.
"""

import os
import json
import logging
from typing import Any, Dict, Optional, Tuple

# Use tomli for reading TOML (works for Python 3.10+)
try:
    import tomli
except ImportError:
    try: import tomllib as tomli # Python 3.11+
    except ImportError: tomli = None

from .compiler import ParsePlan, compile_optstring
from .utils import expand_path

log = logging.getLogger(__name__)

SPEC_KEYS = ("optstring", "min_args", "max_args", "usage")


def _load_single_file(file_path: str) -> dict:
    """Read a JSON or TOML file into a dict."""
    ext = os.path.splitext(file_path)[1].lower()
    try:
        if ext == '.toml':
            if not tomli: raise RuntimeError("tomli (or tomllib) is required for TOML support.")
            with open(file_path, mode='rb') as f: content = tomli.load(f)
        elif ext == '.json':
            with open(file_path, mode='r', encoding='utf-8') as f: content = json.load(f)
        else:
            raise ValueError(f"Unsupported spec file type: {ext}")
    except Exception as e:
        raise RuntimeError(f"Error loading/parsing file {file_path}: {e}") from e

    if not isinstance(content, dict):
        raise RuntimeError(f"Error loading/parsing file {file_path}: top level must be a table/object")
    return content


def load_spec_file(path: str, name: Optional[str] = None) -> Dict[str, Any]:
    """
    Load one option spec from a TOML or JSON file.

    Args:
        path: File path; ``~`` and environment variables are expanded.
        name: Select ``specs.<name>`` instead of the root-level spec.

    Returns:
        Dict with ``optstring``, ``min_args``, ``max_args`` and ``usage``.

    Raises:
        FileNotFoundError: If the file does not exist.
        RuntimeError: If the file cannot be parsed or has an unsupported type.
        KeyError: If `name` is not defined, the spec has no optstring, or it
                  contains unknown keys.
    """
    file_path = expand_path(path)
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Spec file not found: {file_path}")

    data = _load_single_file(file_path)
    if name is not None:
        specs = data.get("specs") or {}
        if name not in specs:
            raise KeyError(f"Spec '{name}' not found in {file_path}")
        data = specs[name]
    else:
        data = {k: v for k, v in data.items() if k != "specs"}

    unknown = sorted(set(data) - set(SPEC_KEYS))
    if unknown:
        raise KeyError(f"Unknown spec keys in {file_path}: {', '.join(unknown)}")
    if "optstring" not in data:
        raise KeyError(f"Spec in {file_path} has no 'optstring'")

    log.debug(f"Loaded spec {name or '<root>'} from {file_path}: {data}")
    return {
        "optstring": data["optstring"],
        "min_args": data.get("min_args", 0),
        "max_args": data.get("max_args"),
        "usage": data.get("usage"),
    }


def compile_spec_file(path: str, name: Optional[str] = None) -> Tuple[ParsePlan, Optional[str]]:
    """Load a spec file and compile it. Returns ``(plan, usage)``."""
    spec = load_spec_file(path, name)
    plan = compile_optstring(spec["optstring"], spec["min_args"], spec["max_args"])
    return plan, spec["usage"]
