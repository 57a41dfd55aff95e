# ui/main_window.py – list/detail window on top of PromptRepository

from typing import Optional
from pathlib import Path

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLineEdit, QLabel, QTableView,
    QTextEdit, QSplitter, QToolBar, QFileDialog, QMessageBox, QPushButton,
    QComboBox, QToolButton, QMenu, QCheckBox, QHeaderView
)
from PySide6.QtCore import Qt, QModelIndex, QSize, QPoint
from PySide6.QtGui import QIcon, QAction, QKeySequence

from config.config_loader import Settings, get_settings
from data.prompt_repository import PromptRepository
from services import prefs
from services.export_service import default_export_filename, export_yaml, record_to_json, write_export
from services.import_service import load_file
from ui.category_dialog import CategoryDialog
from ui.prompt_editor import PromptEditor
from ui.prompt_table_model import PromptTableModel
from utils.html_render import render_details

ICON_DIR = Path("assets/icons")
def icon(name: str) -> QIcon:
    p = ICON_DIR / f"{name}.svg"
    return QIcon(str(p)) if p.exists() else QIcon()


class MainWindow(QMainWindow):
    def __init__(self, app, repo: Optional[PromptRepository] = None,
                 settings: Optional[Settings] = None, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.app = app
        self.settings = settings or get_settings()
        self.repo = repo or PromptRepository.from_settings(self.settings)
        self.setWindowTitle("PromptManager")
        self.resize(1200, 800)

        self._syncing = False

        # Toolbar
        tb = QToolBar("Actions", self)
        tb.setIconSize(QSize(18, 18))
        self.addToolBar(tb)

        self.action_new = QAction(icon("add"), "New", self)
        self.action_new.setShortcut(QKeySequence.New)
        btn_edit = QPushButton(icon("edit"), "Edit")
        btn_del = QPushButton(icon("delete"), "Delete")
        btn_fav = QPushButton(icon("star"), "Favorite")
        btn_copy = QPushButton(icon("copy"), "Copy")
        btn_import = QPushButton(icon("import"), "Import…")
        btn_export = QPushButton(icon("export"), "Export JSON…")
        btn_export_yaml = QPushButton(icon("export"), "Export YAML…")

        tb.addAction(self.action_new)
        for b in (btn_edit, btn_del, btn_fav, btn_copy):
            b.setMinimumHeight(28)
            tb.addWidget(b)
        tb.addSeparator()
        for b in (btn_import, btn_export, btn_export_yaml):
            b.setMinimumHeight(28)
            tb.addWidget(b)

        # Filter row
        filter_row = QHBoxLayout()
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search title, content, tags")
        self.search_edit.setClearButtonEnabled(True)

        self.category_combo = QComboBox()
        self.category_combo.setMinimumWidth(160)
        self._fill_categories()

        btn_cat_menu = QToolButton()
        btn_cat_menu.setText("Categories")
        btn_cat_menu.setPopupMode(QToolButton.InstantPopup)
        cat_menu = QMenu(self)
        act_new_cat = cat_menu.addAction("New category…")
        act_del_cat = cat_menu.addAction("Delete selected category")
        btn_cat_menu.setMenu(cat_menu)

        self.favorites_cb = QCheckBox("Favorites only")
        btn_reset = QPushButton(icon("reset"), "Reset filters")

        filter_row.addWidget(QLabel("Search:"))
        filter_row.addWidget(self.search_edit, 2)
        filter_row.addSpacing(8)
        filter_row.addWidget(QLabel("Category:"))
        filter_row.addWidget(self.category_combo, 1)
        filter_row.addWidget(btn_cat_menu)
        filter_row.addSpacing(8)
        filter_row.addWidget(self.favorites_cb)
        filter_row.addWidget(btn_reset)

        # Table & detail panel
        self.model = PromptTableModel(self.repo, self)
        self.table = QTableView()
        self.table.setModel(self.model)
        self.table.setSelectionBehavior(QTableView.SelectRows)
        self.table.setSelectionMode(QTableView.SingleSelection)
        self.table.verticalHeader().setVisible(False)
        self.table.setAlternatingRowColors(True)
        self.table.setWordWrap(False)
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeToContents)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.setColumnWidth(1, 280)
        self.table.setColumnWidth(2, 120)
        self.table.setColumnWidth(3, 200)
        self.table.setContextMenuPolicy(Qt.CustomContextMenu)
        self.table.customContextMenuRequested.connect(self.on_context_menu)

        self.detail = QTextEdit()
        self.detail.setReadOnly(True)

        splitter = QSplitter(self)
        split_left = QWidget(); left_layout = QVBoxLayout(split_left)
        left_layout.setContentsMargins(10, 10, 10, 10)
        left_layout.addLayout(filter_row)
        left_layout.addWidget(self.table)
        splitter.addWidget(split_left)
        splitter.addWidget(self.detail)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 2)

        wrapper = QWidget(self)
        layout = QVBoxLayout(wrapper)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.addWidget(splitter)
        self.setCentralWidget(wrapper)

        # Signals
        self.search_edit.textChanged.connect(self.repo.set_search_text)
        self.category_combo.currentIndexChanged.connect(self.on_category_changed)
        self.favorites_cb.toggled.connect(self.repo.set_favorites_only)
        btn_reset.clicked.connect(self.on_reset_filters)
        self.table.selectionModel().currentRowChanged.connect(self.on_row_selected)
        self.table.doubleClicked.connect(lambda _idx: self.on_edit())
        self.action_new.triggered.connect(self.on_new)
        btn_edit.clicked.connect(self.on_edit)
        btn_del.clicked.connect(self.on_delete)
        btn_fav.clicked.connect(self.on_toggle_favorite)
        btn_copy.clicked.connect(self.on_copy_content)
        btn_import.clicked.connect(self.on_import)
        btn_export.clicked.connect(self.on_export_json)
        btn_export_yaml.clicked.connect(self.on_export_yaml)
        act_new_cat.triggered.connect(self.on_new_category)
        act_del_cat.triggered.connect(self.on_delete_category)

        self._unsubscribe = self.repo.subscribe(self.on_repo_changed)
        self._load_prefs()
        self.refresh()

    # --- Prefs ---
    def _load_prefs(self):
        p = prefs.load(self.settings.prefs_dir)
        self.search_edit.setText(p.get("search_text", ""))
        self.favorites_cb.setChecked(bool(p.get("favorites_only", False)))
        cat_name = p.get("category", "")
        if cat_name:
            category = self.repo.category_by_name(cat_name)
            if category:
                self.repo.set_selected_category(category)

    def _save_prefs(self):
        category = self.repo.selected_category
        prefs.save({
            "search_text": self.repo.search_text,
            "favorites_only": self.repo.favorites_only,
            "category": category.name if category else "",
        }, self.settings.prefs_dir)

    # --- repository -> view ---
    def on_repo_changed(self, change: str):
        if change == "categories":
            self._fill_categories()
        elif change in ("prompts", "filter"):
            self._sync_filter_widgets()
            self.refresh()
        elif change == "selection":
            self._sync_selection()

    def refresh(self):
        rows = self.repo.filtered_prompts
        self._syncing = True
        try:
            self.model.set_rows(rows)
        finally:
            self._syncing = False
        self._sync_selection()
        self.statusBar().showMessage(f"{len(rows)} of {self.repo.count()} prompts")

    def _fill_categories(self):
        selected = self.repo.selected_category
        self.category_combo.blockSignals(True)
        self.category_combo.clear()
        self.category_combo.addItem("All", None)
        for c in self.repo.categories:
            self.category_combo.addItem(c.name, c.id)
        idx = self.category_combo.findData(selected.id) if selected else 0
        self.category_combo.setCurrentIndex(max(idx, 0))
        self.category_combo.blockSignals(False)

    def _sync_filter_widgets(self):
        if self.search_edit.text() != self.repo.search_text:
            self.search_edit.blockSignals(True)
            self.search_edit.setText(self.repo.search_text)
            self.search_edit.blockSignals(False)
        if self.favorites_cb.isChecked() != self.repo.favorites_only:
            self.favorites_cb.blockSignals(True)
            self.favorites_cb.setChecked(self.repo.favorites_only)
            self.favorites_cb.blockSignals(False)
        selected = self.repo.selected_category
        idx = self.category_combo.findData(selected.id) if selected else 0
        if idx >= 0 and idx != self.category_combo.currentIndex():
            self.category_combo.blockSignals(True)
            self.category_combo.setCurrentIndex(idx)
            self.category_combo.blockSignals(False)

    def _sync_selection(self):
        prompt = self.repo.selected_prompt
        row = self.model.row_of(prompt.id) if prompt else -1
        self._syncing = True
        try:
            if row >= 0:
                self.table.selectRow(row)
            else:
                self.table.clearSelection()
        finally:
            self._syncing = False
        self._update_details(prompt)

    def _update_details(self, prompt):
        category = self.repo.category_for(prompt) if prompt else None
        self.detail.setHtml(render_details(prompt, category))

    def current_prompt(self):
        return self.repo.selected_prompt

    # --- view -> repository ---
    def on_row_selected(self, current: QModelIndex, _prev: QModelIndex):
        if self._syncing:
            return
        self.repo.select_prompt(self.model.row_at(current.row()) if current.isValid() else None)

    def on_category_changed(self, _index: int):
        self.repo.set_selected_category(self.category_combo.currentData())

    def on_reset_filters(self):
        self.repo.reset_filters()

    # CRUD
    def on_new(self):
        dlg = PromptEditor(self.repo.categories, self)
        if dlg.exec():
            data = dlg.get_result()
            self.repo.add_prompt(data["title"], data["content"], data["tags"], data["category"])

    def on_edit(self):
        prompt = self.current_prompt()
        if not prompt:
            QMessageBox.information(self, "Edit", "Please select a prompt.")
            return
        dlg = PromptEditor(self.repo.categories, self, prompt=prompt)
        if dlg.exec():
            data = dlg.get_result()
            self.repo.update_prompt(prompt, data["title"], data["content"], data["tags"], data["category"])

    def on_delete(self):
        prompt = self.current_prompt()
        if not prompt:
            QMessageBox.information(self, "Delete", "Please select a prompt.")
            return
        confirm = QMessageBox.question(self, "Delete", f"Delete '{prompt.title}'?")
        if confirm == QMessageBox.Yes:
            self.repo.delete_prompt(prompt)

    def on_toggle_favorite(self):
        prompt = self.current_prompt()
        if prompt:
            self.repo.toggle_favorite(prompt)

    def on_new_category(self):
        dlg = CategoryDialog(self)
        if dlg.exec():
            data = dlg.get_result()
            if data["name"]:
                self.repo.add_category(data["name"], data["color"])

    def on_delete_category(self):
        category = self.repo.selected_category
        if not category:
            QMessageBox.information(self, "Categories", "Select a category in the filter first.")
            return
        confirm = QMessageBox.question(
            self, "Delete category",
            f"Delete category '{category.name}'? Prompts in it are kept without a category.")
        if confirm == QMessageBox.Yes:
            self.repo.delete_category(category)

    # Clipboard
    def _copy(self, text: str):
        if text:
            self.app.clipboard().setText(text)
            self.statusBar().showMessage("Copied to clipboard", 2000)

    def on_copy_content(self):
        prompt = self.current_prompt()
        if prompt:
            self._copy(prompt.content)

    def on_copy_json(self):
        prompt = self.current_prompt()
        if prompt:
            self._copy(record_to_json(self.repo.export_record(prompt)))

    # Context menu
    def on_context_menu(self, point: QPoint):
        index: QModelIndex = self.table.indexAt(point)
        if not index.isValid():
            return
        self.repo.select_prompt(self.model.row_at(index.row()))
        prompt = self.current_prompt()
        menu = QMenu(self)
        act_copy = menu.addAction("Copy Content")
        act_json = menu.addAction("Copy as JSON")
        menu.addSeparator()
        act_fav = menu.addAction("Remove from Favorites" if prompt and prompt.is_favorite else "Add to Favorites")
        act_edit = menu.addAction("Edit…")
        act_del = menu.addAction("Delete")
        act_copy.triggered.connect(self.on_copy_content)
        act_json.triggered.connect(self.on_copy_json)
        act_fav.triggered.connect(self.on_toggle_favorite)
        act_edit.triggered.connect(self.on_edit)
        act_del.triggered.connect(self.on_delete)
        menu.exec(self.table.viewport().mapToGlobal(point))

    # Import / export
    def on_import(self):
        path, _ = QFileDialog.getOpenFileName(self, "Import Prompts", "", "Prompts (*.json *.yaml *.yml)")
        if not path:
            return
        try:
            raw = load_file(Path(path))
        except (OSError, ValueError) as e:
            QMessageBox.critical(self, "Import error", str(e))
            return
        result = self.repo.import_entries(raw)
        QMessageBox.information(self, "Import", f"Imported {result.added} prompts, skipped {result.skipped}.")

    def on_export_json(self):
        data = self.repo.export_all()
        if data is None:
            QMessageBox.critical(self, "Export error", "Prompts could not be serialized.")
            return
        path, _ = QFileDialog.getSaveFileName(self, "Export Prompts", default_export_filename(), "JSON (*.json)")
        if not path:
            return
        try:
            write_export(data, Path(path))
        except OSError as e:
            QMessageBox.critical(self, "Export error", str(e))
            return
        self.statusBar().showMessage(f"Exported to {path}", 4000)

    def on_export_yaml(self):
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Prompts", default_export_filename(suffix=".yaml"), "YAML (*.yaml *.yml)")
        if not path:
            return
        try:
            export_yaml(self.repo.export_records(), Path(path))
        except OSError as e:
            QMessageBox.critical(self, "Export error", str(e))
            return
        self.statusBar().showMessage(f"Exported to {path}", 4000)

    # Persist preferences on close
    def closeEvent(self, event):
        self._save_prefs()
        self._unsubscribe()
        super().closeEvent(event)
