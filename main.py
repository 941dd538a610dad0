from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QFont
from PyQt5.QtWidgets import (
    QApplication, QPushButton, QMainWindow, QWidget,
    QVBoxLayout, QLabel, QHBoxLayout, QSlider, QMessageBox
)
import logging
import sys

import config
from bmpfile import BMPFile, load
from editor_ui import EditorWidget
from errors import BMPError
from imageView import ImageView

logger = logging.getLogger(__name__)

IDLE_STYLE = """
    QWidget {
        background-color: #f9f9f9;
        border: 3px dashed #aaa;
        border-radius: 20px;
    }
    QLabel {
        color: #555;
        padding: 40px;
    }
"""

HOVER_STYLE = """
    QWidget {
        background-color: #e3f2fd;
        border: 3px solid #42a5f5;
        border-radius: 20px;
    }
    QLabel {
        color: #1e88e5;
        padding: 40px;
    }
"""


class FileDrop(QWidget):
    dropped = pyqtSignal(str)

    def __init__(self):
        super().__init__()
        self.setAcceptDrops(True)

        layout = QVBoxLayout()
        self.setLayout(layout)

        self.label = QLabel("Drop BMP file here")
        self.label.setAlignment(Qt.AlignCenter)
        self.label.setFont(QFont("Segoe UI", 14, QFont.Bold))
        layout.addWidget(self.label)

        self.setStyleSheet(IDLE_STYLE)
        self.setMinimumSize(300, 120)

    def _bmp_path(self, event):
        if event.mimeData().hasUrls():
            urls = event.mimeData().urls()
            if len(urls) == 1:
                path = urls[0].toLocalFile()
                if path.lower().endswith(".bmp"):
                    return path
        return None

    def dragEnterEvent(self, event):
        if self._bmp_path(event):
            event.accept()
            self.setHoverStyle(True)
        else:
            event.ignore()

    def dragMoveEvent(self, event):
        if self._bmp_path(event):
            event.accept()
        else:
            event.ignore()

    def dragLeaveEvent(self, event):
        self.setHoverStyle(False)

    def dropEvent(self, event):
        self.setHoverStyle(False)
        path = self._bmp_path(event)
        if path:
            event.accept()
            self.dropped.emit(path)
        else:
            event.ignore()

    def setHoverStyle(self, hovering: bool):
        if hovering:
            self.setStyleSheet(HOVER_STYLE)
            self.label.setText("Drop your BMP file!")
        else:
            self.setStyleSheet(IDLE_STYLE)
            self.label.setText("Drop BMP file here")


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("BMP Lab")
        self.bmp = BMPFile()

        self.mainwidget = QWidget()
        layout = QVBoxLayout()

        # file info
        info_layout = QHBoxLayout()
        self.filename_label = QLabel("Filename: ")
        self.size_label = QLabel("Size: ")
        self.dimensions_label = QLabel("Dimensions: ")
        self.bpp_label = QLabel("Bits per pixel: ")
        for w in (self.filename_label, self.size_label, self.dimensions_label, self.bpp_label):
            info_layout.addWidget(w)
        layout.addLayout(info_layout)

        # file drop
        fdrop = FileDrop()
        fdrop.dropped.connect(self.onBMPOpen)
        layout.addWidget(fdrop)

        # preview scale, display only
        self.scalelabel = QLabel("Scale: 100%")
        layout.addWidget(self.scalelabel)

        self.scale_slider = QSlider(Qt.Horizontal)
        self.scale_slider.setRange(*config.SCALE_RANGE)
        self.scale_slider.setValue(100)
        self.scale_slider.setTracking(False)   # rescale on release only
        self.scale_slider.valueChanged.connect(self.apply_scale)
        layout.addWidget(self.scale_slider)

        self.ImageViewer = ImageView(config.VIEW_WIDTH, config.VIEW_HEIGHT)
        layout.addWidget(self.ImageViewer)

        self.editor = EditorWidget()
        self.editor.imageChanged.connect(self.ImageViewer.rebuild)
        layout.addWidget(self.editor)

        button = QPushButton("Close")
        button.clicked.connect(self.close)
        button.setFixedSize(200, 50)
        layout.addWidget(button)

        self.mainwidget.setLayout(layout)
        self.setCentralWidget(self.mainwidget)

    def _readableFileSizeScale(self, size):
        if size < 1000: return f"{size} bytes"
        if size < 1_000_000: return f"{size/1000:.2f} KB"
        if size < 1_000_000_000: return f"{size/1_000_000:.2f} MB"
        return f"{size/1_000_000_000:.2f} GB"

    def showFileMetadata(self, bmp):
        self.filename_label.setText("Filename: " + (bmp.filename or ""))
        self.size_label.setText("Size: " + self._readableFileSizeScale(bmp.fileSize))
        self.dimensions_label.setText(f"Dimensions: {bmp.width}×{bmp.height}")
        self.bpp_label.setText("Bits per pixel: " + str(bmp.bpp))

    def onBMPOpen(self, path):
        try:
            bmp = load(path)
        except BMPError as e:
            logger.error("Failed to open %s: %s", path, e)
            QMessageBox.critical(self, "Open BMP", f"Could not open {path}:\n{e}")
            return

        # one active handle at a time
        self.bmp.close()
        self.bmp = bmp
        self.showFileMetadata(bmp)
        self.scale_slider.blockSignals(True)
        self.scale_slider.setValue(100)
        self.scale_slider.blockSignals(False)
        self.scalelabel.setText("Scale: 100%")
        self.ImageViewer.render_bmp(bmp)
        self.editor.set_bmp(bmp)

    def apply_scale(self, slider_val):
        self.scalelabel.setText(f"Scale: {slider_val}%")
        self.ImageViewer.set_scale(slider_val / 100.0)

    def closeEvent(self, event):
        self.bmp.close()
        super().closeEvent(event)


def main(argv=None):
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    argv = sys.argv if argv is None else argv
    app = QApplication(argv)
    window = MainWindow()
    if len(argv) > 1:
        window.onBMPOpen(argv[1])
    window.show()
    return app.exec_()


if __name__ == '__main__':
    sys.exit(main())
