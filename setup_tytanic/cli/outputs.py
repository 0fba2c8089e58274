"""
Step outputs and PATH export for CI runners.

On GitHub Actions the runner exposes files through GITHUB_OUTPUT and
GITHUB_PATH; lines appended to them become step outputs and PATH entries
for later steps. Outside a runner, outputs are printed as name=value lines.
"""

import logging
import os
import uuid
from pathlib import Path
from typing import MutableMapping, Optional, Union

logger = logging.getLogger(__name__)

OUTPUT_FILE_ENV = "GITHUB_OUTPUT"
PATH_FILE_ENV = "GITHUB_PATH"


def _append_line(file_path: str, line: str) -> None:
    with open(file_path, "a", encoding="utf-8") as f:
        f.write(f"{line}\n")


def set_output(
    name: str, value: str, environ: Optional[MutableMapping[str, str]] = None
) -> None:
    """
    Publish a step output.

    Multi-line values use the runner's heredoc syntax.
    """
    environ = os.environ if environ is None else environ
    output_file = environ.get(OUTPUT_FILE_ENV)

    if not output_file:
        print(f"{name}={value}")
        return

    if "\n" in value:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        _append_line(output_file, f"{name}<<{delimiter}\n{value}\n{delimiter}")
    else:
        _append_line(output_file, f"{name}={value}")

    logger.debug(f"Set output '{name}'")


def add_path(
    path: Union[str, Path], environ: Optional[MutableMapping[str, str]] = None
) -> None:
    """Prepend a directory to PATH for this process and later steps."""
    environ = os.environ if environ is None else environ
    path = str(path)

    path_file = environ.get(PATH_FILE_ENV)
    if path_file:
        _append_line(path_file, path)

    current = environ.get("PATH", "")
    environ["PATH"] = f"{path}{os.pathsep}{current}" if current else path

    logger.debug(f"Added {path} to PATH")
