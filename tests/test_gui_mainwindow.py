import json

import pytest

try:
    from PySide6.QtWidgets import QApplication, QMainWindow
    qt_api = "PySide6"
except Exception:
    QApplication = None
    QMainWindow = object  # dummy
    qt_api = None

from config.config_loader import Settings


def _make_window(repo, tmp_path):
    if qt_api is None:
        pytest.skip("PySide6 not installed; skipping UI test.")
    from ui.main_window import MainWindow
    app = QApplication.instance() or QApplication([])
    win = MainWindow(app, repo=repo, settings=Settings(prefs_dir=str(tmp_path)))
    return app, win


@pytest.mark.ui
def test_main_window_class_exists_and_is_qmainwindow():
    if qt_api is None:
        pytest.skip("PySide6 not installed; skipping UI test.")
    from ui.main_window import MainWindow
    assert issubclass(MainWindow, QMainWindow)


@pytest.mark.ui
def test_window_follows_repository_changes(repo, tmp_path):
    app, win = _make_window(repo, tmp_path)
    win.show()
    app.processEvents()
    assert win.windowTitle() == "PromptManager"
    assert win.model.rowCount() == 0

    repo.add_prompt("First", "body", ["urgent"])
    repo.add_prompt("Second", "other")
    assert win.model.rowCount() == 2
    assert win.model.row_at(0).title == "Second"
    assert "Second" in win.detail.toPlainText()

    win.search_edit.setText("urg")
    assert repo.search_text == "urg"
    assert win.model.rowCount() == 1
    assert win.model.row_at(0).title == "First"

    repo.reset_filters()
    assert win.search_edit.text() == ""
    assert win.model.rowCount() == 2
    win.close()


@pytest.mark.ui
def test_category_combo_and_prefs(repo, tmp_path):
    app, win = _make_window(repo, tmp_path)
    win.show()
    cat = repo.add_category("Coding")
    repo.add_prompt("In category", "x", category=cat)
    repo.add_prompt("Loose", "y")
    assert win.category_combo.count() == 2

    win.category_combo.setCurrentIndex(win.category_combo.findData(cat.id))
    assert repo.selected_category == cat
    assert win.model.rowCount() == 1

    win.favorites_cb.setChecked(True)
    assert repo.favorites_only is True
    assert win.model.rowCount() == 0

    win.close()
    saved = json.loads((tmp_path / "user_prefs.json").read_text(encoding="utf-8"))
    assert saved == {"search_text": "", "favorites_only": True, "category": "Coding"}
