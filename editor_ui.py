import io
import logging

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QPushButton, QSpinBox, QMessageBox, QFileDialog
)

import config
from bmpfile import BMPFile, Kind, default_save_path, print_info, save
from errors import BMPError

logger = logging.getLogger(__name__)

FILTER_BUTTONS = (
    ("Box Blur", "box_blur"),
    ("Gaussian Blur", "gaussian_blur"),
    ("Sharpen", "sharpen"),
    ("Outline", "outline"),
    ("Emboss", "emboss"),
)


class EditorWidget(QWidget):
    """
    Buttons for every operation on the current handle.

    Usage:
        ew = EditorWidget()
        ew.set_bmp(bmp)            # bmp is a BMPFile
        ew.imageChanged.connect(view.rebuild)
    """
    imageChanged = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)

        self.current_bmp: BMPFile | None = None
        self._kind_buttons = []    # enabled only while an image is loaded

        self._build_ui()
        self._update_enabled()

    # ---------------- UI ---------------- #

    def _build_ui(self):
        layout = QVBoxLayout()
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSpacing(6)

        title = QLabel("Operations")
        title.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)
        title.setStyleSheet("font-weight: bold; font-size: 14px;")
        layout.addWidget(title)

        # Point operations
        point_row = QHBoxLayout()
        self.negative_btn = QPushButton("Negative")
        self.negative_btn.clicked.connect(lambda: self.run("negative"))
        point_row.addWidget(self.negative_btn)

        self.brightness_spin = QSpinBox()
        self.brightness_spin.setRange(*config.BRIGHTNESS_RANGE)
        self.brightness_spin.setValue(config.DEFAULT_BRIGHTNESS_STEP)
        self.brightness_btn = QPushButton("Brightness")
        self.brightness_btn.clicked.connect(
            lambda: self.run("brightness", self.brightness_spin.value()))
        point_row.addWidget(self.brightness_spin)
        point_row.addWidget(self.brightness_btn)

        # out-of-range values are allowed through; the operation clamps and warns
        self.threshold_spin = QSpinBox()
        self.threshold_spin.setRange(-1000, 1000)
        self.threshold_spin.setValue(config.DEFAULT_THRESHOLD)
        self.threshold_btn = QPushButton("Threshold")
        self.threshold_btn.clicked.connect(
            lambda: self.run("threshold", self.threshold_spin.value()))
        point_row.addWidget(self.threshold_spin)
        point_row.addWidget(self.threshold_btn)

        self.grayscale_btn = QPushButton("Grayscale")
        self.grayscale_btn.clicked.connect(lambda: self.run("grayscale"))
        point_row.addWidget(self.grayscale_btn)
        layout.addLayout(point_row)

        # Filters
        filter_grid = QGridLayout()
        for i, (label, name) in enumerate(FILTER_BUTTONS):
            btn = QPushButton(label)
            btn.clicked.connect(lambda _checked=False, n=name: self.run(n))
            filter_grid.addWidget(btn, i // 3, i % 3)
            self._kind_buttons.append(btn)
        self.equalize_btn = QPushButton("Histogram Equalization")
        self.equalize_btn.clicked.connect(lambda: self.run("equalize"))
        filter_grid.addWidget(self.equalize_btn, 1, 2)
        layout.addLayout(filter_grid)

        # Info / save
        file_row = QHBoxLayout()
        self.info_btn = QPushButton("Image Info")
        self.info_btn.clicked.connect(self.on_info_clicked)
        self.save_btn = QPushButton("Save Image")
        self.save_btn.clicked.connect(self.on_save_clicked)
        file_row.addWidget(self.info_btn)
        file_row.addWidget(self.save_btn)
        layout.addLayout(file_row)

        self.status_label = QLabel("Status: no image loaded")
        self.status_label.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)
        layout.addWidget(self.status_label)

        self._kind_buttons += [self.negative_btn, self.brightness_btn, self.equalize_btn,
                               self.info_btn, self.save_btn]

        self.setLayout(layout)

        self.setStyleSheet("""
            QWidget {
                background-color: #f5f5f5;
                border: 1px solid #ccc;
                border-radius: 8px;
            }
            QPushButton {
                padding: 6px 10px;
            }
        """)

    # -------------- Public API -------------- #

    def set_bmp(self, bmp: BMPFile):
        """
        Tell the widget which handle to work with.
        Call this from MainWindow.onBMPOpen().
        """
        self.current_bmp = bmp
        self._update_enabled()
        self._set_status(f"ready ({bmp.width}x{bmp.height}, {bmp.bpp}-bit)")

    def run(self, operation, *args):
        if self.current_bmp is None or not self.current_bmp.is_loaded():
            self._set_status("No BMP loaded.", error=True)
            return False

        try:
            self.current_bmp.apply(operation, *args)
        except BMPError as e:
            logger.error("%s failed: %s", operation, e)
            self._set_status(f"{operation} error: {e}", error=True)
            return False

        self._set_status(f"{operation.replace('_', ' ')} applied.")
        self.imageChanged.emit()
        return True

    # -------------- Slots -------------- #

    def on_info_clicked(self):
        out = io.StringIO()
        print_info(self.current_bmp, file=out)
        QMessageBox.information(self, "Image Info", out.getvalue())

    def on_save_clicked(self):
        if self.current_bmp is None or not self.current_bmp.is_loaded():
            QMessageBox.warning(self, "Save", "No image loaded to save.")
            return

        path, _ = QFileDialog.getSaveFileName(
            self,
            "Save BMP File",
            default_save_path(self.current_bmp.url or "image.bmp"),
            "BMP Files (*.bmp);;All Files (*)"
        )
        if not path:
            return

        try:
            size = save(self.current_bmp, path)
            self._set_status(f"saved {size} bytes to {path}")
        except BMPError as e:
            self._set_status(f"Save error: {e}", error=True)
            QMessageBox.critical(self, "Error Saving", str(e))

    # -------------- Helpers -------------- #

    def _update_enabled(self):
        bmp = self.current_bmp
        loaded = bmp is not None and bmp.is_loaded()
        for btn in self._kind_buttons:
            btn.setEnabled(loaded)
        gray = loaded and bmp.kind is Kind.GRAY
        color = loaded and bmp.kind is Kind.COLOR
        self.brightness_spin.setEnabled(loaded)
        self.threshold_btn.setEnabled(gray)
        self.threshold_spin.setEnabled(gray)
        self.grayscale_btn.setEnabled(color)

    def _set_status(self, text: str, error: bool = False):
        if error:
            self.status_label.setStyleSheet("color: red;")
        else:
            self.status_label.setStyleSheet("color: #333;")
        self.status_label.setText("Status: " + text)
