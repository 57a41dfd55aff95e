from __future__ import annotations
from typing import Optional, Dict, Any, List

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QLabel, QLineEdit, QTextEdit,
    QComboBox, QDialogButtonBox
)

from data.tag_normalizer import split_tags, join_tags
from models.prompt import Category, Prompt


class PromptEditor(QDialog):
    """Create or edit a prompt. Title and content are required."""

    def __init__(self, categories: List[Category], parent=None, prompt: Optional[Prompt] = None):
        super().__init__(parent)
        self.prompt = prompt
        self.setWindowTitle("Edit Prompt" if prompt else "New Prompt")
        self.resize(640, 520)

        root = QVBoxLayout(self)

        self.title_edit = QLineEdit(prompt.title if prompt else "")
        root.addWidget(QLabel("Title *"))
        root.addWidget(self.title_edit)

        # "None" first, then categories in repository order
        self.category_combo = QComboBox()
        self.category_combo.addItem("None", None)
        for c in categories:
            self.category_combo.addItem(c.name, c.id)
        if prompt and prompt.category_id:
            idx = self.category_combo.findData(prompt.category_id)
            if idx >= 0:
                self.category_combo.setCurrentIndex(idx)
        root.addWidget(QLabel("Category"))
        root.addWidget(self.category_combo)

        self.tags_edit = QLineEdit(join_tags(prompt.tags) if prompt else "")
        self.tags_edit.setPlaceholderText("comma separated")
        root.addWidget(QLabel("Tags"))
        root.addWidget(self.tags_edit)

        self.content_edit = QTextEdit()
        self.content_edit.setAcceptRichText(False)
        self.content_edit.setPlainText(prompt.content if prompt else "")
        root.addWidget(QLabel("Content *"))
        root.addWidget(self.content_edit, 1)

        self.error_lbl = QLabel("")
        self.error_lbl.setStyleSheet("color:#ef4444;")
        root.addWidget(self.error_lbl)

        self.buttons = QDialogButtonBox(QDialogButtonBox.Cancel | QDialogButtonBox.Ok)
        self.buttons.button(QDialogButtonBox.Ok).setText("Update" if prompt else "Create")
        root.addWidget(self.buttons)
        self.buttons.accepted.connect(self.on_accept)
        self.buttons.rejected.connect(self.reject)

        self.title_edit.textChanged.connect(self.validate)
        self.content_edit.textChanged.connect(self.validate)

        self.validate()

    def validate(self) -> bool:
        title_ok = bool(self.title_edit.text().strip())
        content_ok = bool(self.content_edit.toPlainText().strip())

        errors = []
        if not title_ok:
            errors.append("Title is required.")
        if not content_ok:
            errors.append("Content is required.")

        def mark(widget, ok: bool):
            widget.setStyleSheet("" if ok else "border:1px solid #ef4444;")
        mark(self.title_edit, title_ok)
        mark(self.content_edit, content_ok)

        self.error_lbl.setText("\n".join(errors))
        ok = not errors
        self.buttons.button(QDialogButtonBox.Ok).setEnabled(ok)
        return ok

    def get_result(self) -> Dict[str, Any]:
        return {
            "title": self.title_edit.text().strip(),
            "content": self.content_edit.toPlainText(),
            "tags": split_tags(self.tags_edit.text()),
            "category": self.category_combo.currentData(),
        }

    def on_accept(self):
        if self.validate():
            self.accept()
