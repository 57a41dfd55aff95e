import json

from tools.prompt_io import main


def test_export_then_import(repo, tmp_path, capsys):
    repo.add_prompt("A", "x", ["t"])
    out = tmp_path / "export.json"
    assert main(["export", "--out", str(out)], repo=repo) == 0
    assert json.loads(out.read_text(encoding="utf-8"))[0]["title"] == "A"

    assert main(["import", str(out)], repo=repo) == 0
    assert "Imported 1 prompts, skipped 0" in capsys.readouterr().out
    assert repo.count() == 2


def test_import_missing_file_fails(repo, tmp_path, capsys):
    assert main(["import", str(tmp_path / "nope.json")], repo=repo) == 1
    assert "Import failed" in capsys.readouterr().err


def test_list_filters(repo, capsys):
    cat = repo.add_category("Coding")
    repo.add_prompt("Review", "code", ["dev"], cat)
    repo.add_prompt("Story", "once upon", ["creative"])
    assert main(["list", "--category", "Coding"], repo=repo) == 0
    out = capsys.readouterr().out
    assert "Review" in out and "Story" not in out

    assert main(["list", "--category", "Nope"], repo=repo) == 1
