"""
Application Initialization
==========================
Loads the colour-matching table, builds the controller and the main window,
and starts the Qt event loop.

The spectrum table is loaded exactly once here and handed to everything
that needs it; nothing else reads the resource.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from PySide6.QtWidgets import QMessageBox

from spectralcurve.app.application import create_app
from spectralcurve.config import DEFAULT_CALIBRATION, DEFAULT_EDITOR, DEFAULT_SPECTRUM_PATH
from spectralcurve.controller.pipeline import PipelineController
from spectralcurve.logging_config import setup_logging
from spectralcurve.model.spectrum import SpectrumLoadError, SpectrumTable
from spectralcurve.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="spectralcurve",
        description="Draw a Bézier spectrum and read off its chromaticity."
    )
    parser.add_argument(
        "--spectrum", default=DEFAULT_SPECTRUM_PATH,
        help="Colour-matching table (wavelength followed by X, Y, Z weights per line)."
    )
    parser.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity."
    )
    parser.add_argument("--log-file", default=None, help="Also write the log to this file.")
    parser.add_argument(
        "--trace-pipeline", action="store_true",
        help="Log every curve recomputation at DEBUG level (very verbose while dragging)."
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(
        level=getattr(logging, args.log_level),
        log_file=args.log_file,
        trace_pipeline=args.trace_pipeline,
    )

    # 2. Create the Qt Application
    app = create_app()

    # 3. Load the colour-matching table, never continue without it
    try:
        table = SpectrumTable.load(args.spectrum)
    except SpectrumLoadError as e:
        logger.error(f"Cannot start without a spectrum table: {e}")
        QMessageBox.critical(None, "Spectrum table", f"Failed to load the spectrum table:\n{e}")
        return 1

    # 4. Controller + Main Window
    controller = PipelineController(table, calibration=DEFAULT_CALIBRATION, editor_config=DEFAULT_EDITOR)
    window = MainWindow(controller, editor_config=DEFAULT_EDITOR)
    window.show()

    # 5. Start Event Loop
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
