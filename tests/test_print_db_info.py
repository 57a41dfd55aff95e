from tools import print_db_info


def test_prints_counts_for_memory_store(monkeypatch, capsys):
    monkeypatch.setenv("PROMPT_STORE", "memory")
    monkeypatch.setenv("PROMPT_SEED_ON_EMPTY", "1")
    print_db_info.main()
    out = capsys.readouterr().out
    assert "Store: memory" in out
    assert "Prompts: 4  Favorites: 0  Categories: 3" in out
