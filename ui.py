import logging
import sys
from typing import Dict

from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QApplication, QComboBox, QFormLayout, QGroupBox, QHBoxLayout, QLabel, QLineEdit,
    QMainWindow, QPushButton, QTabWidget, QVBoxLayout, QWidget
)

from ammo import ammo_names, select_ammo
from ballistics import SolverError
from config import DEFAULT_AMMO, DEFAULT_VELOCITY, WINDOW_TITLE
from models import Vector3
from result_panel import ShotPanel
from solver import solve_between
from utils import parse_float_field, sanitize_signed_float

log = logging.getLogger(__name__)

AXES = ("X", "Y", "Z")


def _signed_float_edit(text: str = "") -> QLineEdit:
    le = QLineEdit(text)

    def on_edit(s: str):
        clean = sanitize_signed_float(s)
        if clean != s:
            le.setText(clean)

    le.textEdited.connect(on_edit)
    return le


class CartesianTab(QWidget):
    def __init__(self, number: int, parent=None):
        super().__init__(parent)
        self.number = number

        lay = QVBoxLayout(self)
        header = QLabel("Cartesian")
        header.setStyleSheet("font-size: 24px; font-weight: 700;")
        lay.addWidget(header)

        coords = QHBoxLayout()
        self.cannon: Dict[str, QLineEdit] = {}
        self.target: Dict[str, QLineEdit] = {}
        for title, fields in (("Cannon", self.cannon), ("Target", self.target)):
            box = QGroupBox(title)
            form = QFormLayout(box)
            for axis in AXES:
                fields[axis] = _signed_float_edit()
                form.addRow(f"{axis}:", fields[axis])
            coords.addWidget(box)
        lay.addLayout(coords)

        shell_box = QGroupBox("Projectile")
        form = QFormLayout(shell_box)
        self.ammo = QComboBox(); self.ammo.addItems(ammo_names())
        self.ammo.setCurrentText(DEFAULT_AMMO)
        self.velocity = _signed_float_edit(DEFAULT_VELOCITY)
        self.drag = _signed_float_edit(str(select_ammo(DEFAULT_AMMO).drag))
        form.addRow("Ammo type", self.ammo)
        form.addRow("Muzzle velocity", self.velocity)
        form.addRow("Drag", self.drag)
        lay.addWidget(shell_box)

        self.ammo.currentTextChanged.connect(self._ammo_changed)

        self.btn_calc = QPushButton("Calculate")
        self.btn_calc.clicked.connect(self.compute)
        lay.addWidget(self.btn_calc)

        results = QHBoxLayout()
        self.direct_panel = ShotPanel("Direct Shot", direct=True)
        self.indirect_panel = ShotPanel("Indirect Shot", direct=False)
        results.addWidget(self.direct_panel)
        results.addWidget(self.indirect_panel)
        lay.addLayout(results)

        self.status = QLabel("—")
        lay.addWidget(self.status)
        lay.addStretch(1)

    def title(self) -> str:
        return f"Cartesian Tab {self.number}"

    def _ammo_changed(self, name: str):
        self.drag.setText(str(select_ammo(name).drag))

    def _point(self, fields: Dict[str, QLineEdit], label: str) -> Vector3:
        x, y, z = (parse_float_field(fields[a].text(), f"{label} {a}", default=0.0) for a in AXES)
        return Vector3(x, y, z)

    def compute(self):
        try:
            origin = self._point(self.cannon, "Cannon")
            target = self._point(self.target, "Target")
            ammo = select_ammo(self.ammo.currentText())
            velocity = parse_float_field(self.velocity.text(), "Muzzle velocity")
            drag = parse_float_field(self.drag.text(), "Drag")
            sol = solve_between(origin, target, ammo, velocity, drag=drag)
        except (ValueError, SolverError) as e:
            log.info("%s: calculation failed: %s", self.title(), e)
            self.direct_panel.clear()
            self.indirect_panel.clear()
            self.status.setText(f"Error: {e}")
            return

        self.direct_panel.show_solution(sol)
        self.indirect_panel.show_solution(sol)
        self.status.setText(f"Done: {ammo.name}" if sol.reachable else "Target out of range")


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(900, 640)
        self._counter = 0

        self.setStyleSheet("""
            QWidget { background: #0d0f12; color: #e6e6e6; font-size: 13px; }
            QGroupBox { border: 1px solid #2a2f36; margin-top: 10px; padding: 10px; border-radius: 6px; }
            QGroupBox::title { subcontrol-origin: margin; left: 8px; padding: 0 4px; color: #ffffff; font-weight: 700; }
            QLineEdit, QComboBox { background: #141a21; border: 1px solid #2a2f36; padding: 6px; border-radius: 4px; }
            QPushButton { background: #1a2028; border: 1px solid #3a4048; padding: 10px; border-radius: 6px; font-weight: 700; }
            QPushButton:hover { background: #222a34; }
            QTabWidget::pane { border: 1px solid #2a2f36; }
        """)

        self.tabs = QTabWidget()
        self.tabs.setTabsClosable(True)
        self.tabs.setMovable(True)
        self.tabs.tabCloseRequested.connect(self.close_tab)
        self.setCentralWidget(self.tabs)

        btn_add = QPushButton("+")
        btn_add.setToolTip("Add Cartesian tab")
        btn_add.clicked.connect(self.add_tab)
        self.tabs.setCornerWidget(btn_add)

        QShortcut(QKeySequence("Return"), self, activated=self.compute_current)
        QShortcut(QKeySequence("Ctrl+T"), self, activated=self.add_tab)

        self.add_tab()

    def add_tab(self):
        self._counter += 1
        tab = CartesianTab(self._counter)
        idx = self.tabs.addTab(tab, tab.title())
        self.tabs.setCurrentIndex(idx)

    def close_tab(self, idx: int):
        if self.tabs.count() <= 1:
            return
        w = self.tabs.widget(idx)
        self.tabs.removeTab(idx)
        w.deleteLater()

    def compute_current(self):
        tab = self.tabs.currentWidget()
        if isinstance(tab, CartesianTab):
            tab.compute()


def main():
    app = QApplication(sys.argv)
    w = MainWindow(); w.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
