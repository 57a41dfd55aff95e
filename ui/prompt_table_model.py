from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from PySide6.QtGui import QColor

COLUMNS = ["favorite", "title", "category", "tags", "updated_at"]
HEADERS = {"favorite": "★", "title": "Title", "category": "Category", "tags": "Tags", "updated_at": "Updated"}


class PromptTableModel(QAbstractTableModel):
    """Read-only view over the repository's filtered prompts."""

    def __init__(self, repo, parent=None):
        super().__init__(parent)
        self.repo = repo
        self._rows = []

    def set_rows(self, rows):
        self.beginResetModel()
        self._rows = list(rows)
        self.endResetModel()

    def rowCount(self, parent=QModelIndex()):
        return 0 if parent.isValid() else len(self._rows)

    def columnCount(self, parent=QModelIndex()):
        return 0 if parent.isValid() else len(COLUMNS)

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        prompt = self._rows[index.row()]
        key = COLUMNS[index.column()]
        category = self.repo.category_for(prompt) if key == "category" else None

        if role in (Qt.DisplayRole, Qt.EditRole):
            if key == "favorite":
                return "★" if prompt.is_favorite else ""
            if key == "title":
                return prompt.title
            if key == "category":
                return category.name if category else ""
            if key == "tags":
                return ", ".join(prompt.tags)
            if key == "updated_at":
                return prompt.updated_at.astimezone().strftime("%Y-%m-%d %H:%M")

        if role == Qt.ToolTipRole and key == "title":
            return prompt.content[:300]

        if role == Qt.ForegroundRole and key == "category" and category and category.color:
            color = QColor(category.color)
            if color.isValid():
                return color

        return None

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole:
            return None
        if orientation == Qt.Horizontal:
            return HEADERS.get(COLUMNS[section], COLUMNS[section])
        return str(section + 1)

    def row_at(self, row_idx: int):
        return self._rows[row_idx] if 0 <= row_idx < len(self._rows) else None

    def row_of(self, prompt_id: str) -> int:
        for i, p in enumerate(self._rows):
            if p.id == prompt_id:
                return i
        return -1
