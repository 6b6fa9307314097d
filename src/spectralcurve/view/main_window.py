"""
Main Application Window
=======================
Editor canvas on the left, chromaticity diagram on the right, and a control
strip with the curve degree, display toggles and reset.
"""
from __future__ import annotations

import logging

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QSplitter,
    QLabel, QLineEdit, QCheckBox, QPushButton
)
from PySide6.QtCore import Qt

from spectralcurve.config import EditorConfig, DEFAULT_EDITOR
from spectralcurve.controller.pipeline import PipelineController
from spectralcurve.model.state import PipelineResult
from spectralcurve.view.widgets.chromaticity_diagram import ChromaticityDiagram
from spectralcurve.view.widgets.curve_canvas import CurveCanvas

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Spectral Curve"


class MainWindow(QMainWindow):
    def __init__(self, controller: PipelineController, editor_config: EditorConfig = DEFAULT_EDITOR) -> None:
        super().__init__()
        self.controller = controller

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1300, 700)

        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QVBoxLayout(main_widget)

        # --- 1. CONTROL STRIP ---
        controls = QHBoxLayout()
        controls.addWidget(QLabel("Degree:"))

        self.degree_edit = QLineEdit(str(controller.editor.degree))
        self.degree_edit.setMaximumWidth(60)
        controls.addWidget(self.degree_edit)

        self.show_point_check = QCheckBox("Show chromaticity point")
        controls.addWidget(self.show_point_check)

        self.show_grid_check = QCheckBox("Show grid")
        self.show_grid_check.setChecked(True)
        controls.addWidget(self.show_grid_check)

        self.reset_button = QPushButton("Reset")
        controls.addWidget(self.reset_button)
        controls.addStretch()

        self.coordinate_label = QLabel("")
        controls.addWidget(self.coordinate_label)
        main_layout.addLayout(controls)

        # --- 2. CANVAS + DIAGRAM ---
        splitter = QSplitter(Qt.Horizontal)
        self.canvas = CurveCanvas(controller, point_radius=editor_config.point_radius)
        self.diagram = ChromaticityDiagram(controller.table)
        splitter.addWidget(self.canvas)
        splitter.addWidget(self.diagram)
        splitter.setSizes([800, 500])
        main_layout.addWidget(splitter, 1)

        # --- SIGNAL CONNECTIONS ---
        self.degree_edit.textChanged.connect(controller.set_degree_text)
        self.show_point_check.toggled.connect(self.on_show_point_toggled)
        self.show_grid_check.toggled.connect(self.canvas.set_show_grid)
        self.reset_button.clicked.connect(self.on_reset)
        controller.result_changed.connect(self.on_result_changed)

    def on_show_point_toggled(self, checked: bool) -> None:
        self.diagram.set_marker_visible(checked)
        self._update_coordinate_label(self.controller.result)

    def on_reset(self) -> None:
        self.controller.reset()
        self.show_point_check.setChecked(False)

    def on_result_changed(self, result: PipelineResult) -> None:
        self.diagram.set_coordinate(result.chromaticity)
        self._update_coordinate_label(result)

    def _update_coordinate_label(self, result: PipelineResult) -> None:
        if self.show_point_check.isChecked() and result.chromaticity is not None:
            self.coordinate_label.setText(f"xy = {result.chromaticity.format(5)}")
        else:
            self.coordinate_label.setText("")
