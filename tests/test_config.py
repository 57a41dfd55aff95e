import os

from config.config_loader import Settings, get_settings, load_config

ENV_VARS = ("PROMPT_DB_PATH", "PROMPT_STORE", "PROMPT_SEED_ON_EMPTY", "LOG_LEVEL", "PROMPT_PREFS_DIR")


def _clear_env(monkeypatch):
    # setenv first so teardown restores the original state even for unset vars
    for var in ENV_VARS:
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)


def test_settings_defaults(monkeypatch):
    _clear_env(monkeypatch)
    s = get_settings()
    assert s.db_path == "data/prompts.json"
    assert s.store == "json"
    assert s.seed_on_empty is True
    assert s.log_level == "INFO"


def test_settings_from_env_file(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    env = tmp_path / ".env"
    env.write_text(
        "PROMPT_DB_PATH=/tmp/custom.json\nPROMPT_STORE=memory\nPROMPT_SEED_ON_EMPTY=no\n"
        "LOG_LEVEL=debug\nPROMPT_PREFS_DIR=/tmp/prefs\n",
        encoding="utf-8",
    )
    load_config(str(env))
    assert os.environ["PROMPT_STORE"] == "memory"
    assert get_settings() == Settings(
        db_path="/tmp/custom.json", store="memory", seed_on_empty=False,
        log_level="DEBUG", prefs_dir="/tmp/prefs",
    )
