from __future__ import annotations

import logging
import sys

_DEFAULT_FORMAT = "lintkit: %(message)s"
# Debug records come from the engine modules; the logger name tells directive
# matches (lintkit.engine.suppression) from fix attempts (lintkit.engine.fixes).
_VERBOSE_FORMAT = "lintkit [%(levelname)s] %(name)s: %(message)s"


def configure_logging(*, verbose: bool, quiet: bool) -> None:
    """
    Route lintkit's module loggers to stderr for the CLI.

    `--verbose` shows every fired disable directive and every fix attempt,
    `--quiet` keeps only warnings such as ignored re-enable directives. Stdout
    is left to the renderers so `--format json` stays parseable.
    """

    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    fmt = _VERBOSE_FORMAT if verbose else _DEFAULT_FORMAT
    logging.basicConfig(level=level, format=fmt, stream=sys.stderr, force=True)
