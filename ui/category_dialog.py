from __future__ import annotations
from typing import Dict, Any

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QPushButton,
    QColorDialog, QDialogButtonBox
)
from PySide6.QtGui import QColor


class CategoryDialog(QDialog):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("New Category")
        self.resize(360, 140)

        root = QVBoxLayout(self)
        self.name_edit = QLineEdit()
        self.name_edit.setPlaceholderText("Category name")
        root.addWidget(QLabel("Name *"))
        root.addWidget(self.name_edit)

        color_row = QHBoxLayout()
        self.color_edit = QLineEdit()
        self.color_edit.setPlaceholderText("#4ECDC4 (optional)")
        pick = QPushButton("Pick…")
        pick.clicked.connect(self.on_pick_color)
        color_row.addWidget(self.color_edit, 1)
        color_row.addWidget(pick)
        root.addWidget(QLabel("Color"))
        root.addLayout(color_row)

        self.buttons = QDialogButtonBox(QDialogButtonBox.Cancel | QDialogButtonBox.Ok)
        self.buttons.button(QDialogButtonBox.Ok).setText("Create")
        root.addWidget(self.buttons)
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)

        self.name_edit.textChanged.connect(self.validate)
        self.validate()

    def validate(self):
        self.buttons.button(QDialogButtonBox.Ok).setEnabled(bool(self.name_edit.text().strip()))

    def on_pick_color(self):
        initial = QColor(self.color_edit.text().strip() or "#4ECDC4")
        color = QColorDialog.getColor(initial, self, "Category color")
        if color.isValid():
            self.color_edit.setText(color.name().upper())

    def get_result(self) -> Dict[str, Any]:
        return {
            "name": self.name_edit.text().strip(),
            "color": self.color_edit.text().strip() or None,
        }
