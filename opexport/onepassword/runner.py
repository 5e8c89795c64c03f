"""Run the op CLI with JSON output and validate what it prints."""

from __future__ import annotations

import logging
import subprocess
from typing import TypeVar

from pydantic import TypeAdapter, ValidationError

from opexport.config import OPConfig, get_config
from opexport.onepassword.errors import CLIError, CommandError, DeserializeError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run(args: list[str], model: type[T] | object, op: OPConfig | None = None) -> T:
    """Execute ``op <args> [--cache] --format json`` and parse stdout as ``model``.

    ``model`` is anything a pydantic TypeAdapter accepts, e.g. ``OPVault`` or
    ``list[ListedItem]``.

    Raises:
        CommandError: op could not be started.
        CLIError: op wrote to stderr.
        DeserializeError: stdout is not valid JSON for ``model``.
    """
    op = op or get_config().op
    cmd = [op.bin, *args, *op.output_args]
    logger.debug("Running %s", " ".join(cmd))

    try:
        proc = subprocess.run(cmd, capture_output=True, check=False)
    except OSError as e:
        logger.warning("Cannot launch %s: %s", op.bin, e)
        raise CommandError(e) from e

    if proc.stderr:
        stderr = proc.stderr.decode("utf-8", errors="replace")
        logger.warning("op %s failed: %s", " ".join(args), stderr.strip())
        raise CLIError(stderr)

    try:
        return TypeAdapter(model).validate_json(proc.stdout)
    except ValidationError as e:
        logger.warning("Unexpected output from op %s: %s", " ".join(args), e)
        raise DeserializeError(str(e), args) from e
