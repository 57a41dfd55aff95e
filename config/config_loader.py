import logging
import os
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv

_TRUE = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    db_path: str = "data/prompts.json"
    store: str = "json"
    seed_on_empty: bool = True
    log_level: str = "INFO"
    prefs_dir: str = str(Path.home() / ".promptmanager")


def load_config(env_path: str | None = None) -> None:
    env_file = Path(env_path) if env_path else Path(".env")
    if not env_file.exists():
        logging.warning("'.env' not found – using defaults. Copy '.env.template' to '.env'.")
    load_dotenv(dotenv_path=env_file if env_file.exists() else None)
    logging.info("Configuration loaded.")


def get_settings() -> Settings:
    defaults = Settings()
    return Settings(
        db_path=os.getenv("PROMPT_DB_PATH") or defaults.db_path,
        store=os.getenv("PROMPT_STORE") or defaults.store,
        seed_on_empty=os.getenv("PROMPT_SEED_ON_EMPTY", "1").strip().lower() in _TRUE,
        log_level=(os.getenv("LOG_LEVEL") or defaults.log_level).upper(),
        prefs_dir=os.getenv("PROMPT_PREFS_DIR") or defaults.prefs_dir,
    )
