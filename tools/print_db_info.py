# Print DB info (backend, path, counts). Usage: python -m tools.print_db_info
from __future__ import annotations
from pathlib import Path

from config.config_loader import load_config, get_settings
from data.prompt_repository import PromptRepository
from data.prompt_store import JsonPromptStore


def main():
    load_config()
    repo = PromptRepository.from_settings(get_settings())
    print(f"Store: {repo.store.describe()}")
    if isinstance(repo.store, JsonPromptStore):
        p = Path(repo.store.db_path)
        print(f"Exists: {p.exists()}  Size: {p.stat().st_size if p.exists() else 0} bytes")
    favorites = sum(1 for p in repo.prompts if p.is_favorite)
    print(f"Prompts: {repo.count()}  Favorites: {favorites}  Categories: {len(repo.categories)}")

if __name__ == '__main__':
    main()
