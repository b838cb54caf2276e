from PySide6.QtCore import Qt
from PySide6.QtWidgets import QGroupBox, QLabel, QPushButton, QVBoxLayout

from models import FiringSolution
from utils import format_shot


class ShotPanel(QGroupBox):
    """One branch of a firing solution (direct or indirect shot)."""

    def __init__(self, title: str, direct: bool, parent=None):
        super().__init__(title, parent)
        self.direct = direct

        lay = QVBoxLayout(self)
        self.label = QLabel("—")
        self.label.setTextInteractionFlags(Qt.TextSelectableByMouse)
        self.label.setStyleSheet("font-size: 14px; font-weight: 700;")
        lay.addWidget(self.label)

        self.btn_copy = QPushButton("Copy")
        lay.addWidget(self.btn_copy)
        self.btn_copy.clicked.connect(self.copy_text)

    def show_solution(self, sol: FiringSolution):
        self.label.setText("\n".join(format_shot(sol, self.direct)))

    def clear(self):
        self.label.setText("—")

    def copy_text(self):
        from PySide6.QtGui import QGuiApplication
        cb = QGuiApplication.clipboard()
        if cb is not None:
            cb.setText(self.label.text())
