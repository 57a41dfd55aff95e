import logging, sys, os

os.environ.setdefault("PYTHONUTF8", "1")
try:
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")
except (AttributeError, OSError):
    pass

from PySide6.QtWidgets import QApplication
from config.config_loader import load_config, get_settings
from data.prompt_repository import PromptRepository
from ui.main_window import MainWindow


logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")

def main():
    load_config()
    settings = get_settings()
    try:
        logging.getLogger().setLevel(settings.log_level)
        repo = PromptRepository.from_settings(settings)

        app = QApplication(sys.argv)
        app.setApplicationName("PromptManager")
        win = MainWindow(app, repo=repo, settings=settings)
        win.show()
        sys.exit(app.exec())
    except Exception:
        logging.exception("Failed to start PromptManager")
        sys.exit(1)

if __name__ == "__main__":
    main()
