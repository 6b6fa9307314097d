"""
Logging Configuration
Sets up the global logger for the application.

Dragging a control point recomputes the pipeline on every mouse move, so the
per-edit loggers would flood a DEBUG session. They stay at INFO unless
pipeline tracing is requested explicitly.
"""
import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "spectralcurve"

# Loggers that emit a record per edit of the control polygon
PIPELINE_LOGGERS = (
    "spectralcurve.model.state",
    "spectralcurve.model.chromaticity",
    "spectralcurve.controller.pipeline",
)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    trace_pipeline: bool = False,
) -> None:
    """
    Configures the 'spectralcurve' logger namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
        trace_pipeline: Let the per-edit pipeline loggers through at `level`.
            When False they are held at INFO or above.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Avoid duplicate handlers when the window is reopened in the same process
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    pipeline_level = level if trace_pipeline else max(level, logging.INFO)
    for name in PIPELINE_LOGGERS:
        logging.getLogger(name).setLevel(pipeline_level)

    logger.debug(
        "Logging initialized at %s (pipeline at %s).",
        logging.getLevelName(level), logging.getLevelName(pipeline_level)
    )
