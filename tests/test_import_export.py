import json
from datetime import datetime

import pytest
import yaml

from services.export_service import EXPORT_FIELDS, default_export_filename, export_yaml, iso_utc
from services.import_service import ImportResult, load_file, parse_row


def _tuples(prompts):
    return sorted((p.title, p.content, tuple(p.tags), p.is_favorite) for p in prompts)


def test_export_shape_and_category_name(repo):
    cat = repo.add_category("Coding")
    repo.add_prompt("A", "line1\nline2", ["x"], cat)
    repo.add_prompt("B", "y")
    data = repo.export_all()
    assert data.decode("utf-8").startswith("[\n  {")
    rows = json.loads(data)
    assert [r["title"] for r in rows] == ["B", "A"]
    assert list(rows[0]) == EXPORT_FIELDS
    assert rows[1]["category"] == "Coding"
    assert rows[0]["category"] == ""
    assert rows[1]["createdAt"] == "2024-05-01T09:30:01Z"


def test_export_of_dangling_category_is_empty(repo):
    cat = repo.add_category("Gone")
    repo.add_prompt("A", "x", category=cat)
    repo.delete_category(cat)
    assert json.loads(repo.export_all())[0]["category"] == ""


def test_roundtrip_reproduces_content_with_new_ids(repo):
    a = repo.add_prompt("A", "x", ["t1", "t2"])
    repo.add_prompt("B", "y")
    repo.toggle_favorite(a)
    exported = repo.export_all()
    old_ids = {p.id for p in repo.prompts}
    before = _tuples(repo.prompts)

    for p in repo.prompts:
        repo.delete_prompt(p)
    result = repo.import_all(exported)

    assert result == ImportResult(added=2, skipped=0)
    assert _tuples(repo.prompts) == before
    assert not ({p.id for p in repo.prompts} & old_ids)


def test_import_skips_invalid_entries_and_resolves_categories(repo):
    cat = repo.add_category("Writing")
    payload = json.dumps([
        {"title": "ok", "content": "c", "tags": ["a", " b "], "category": "Writing", "isFavorite": True, "id": "keep-me-not"},
        {"title": "no content"},
        {"content": "no title"},
        "not an object",
        {"title": "bad tags", "content": "c", "tags": "a,b", "category": "Unknown"},
        {"title": "mixed tags", "content": "c", "tags": ["a", 1]},
    ]).encode("utf-8")

    result = repo.import_all(payload)
    assert result == ImportResult(added=3, skipped=3)

    by_title = {p.title: p for p in repo.prompts}
    assert by_title["ok"].category_id == cat.id
    assert by_title["ok"].tags == ["a", "b"]
    assert by_title["ok"].is_favorite is True
    assert by_title["ok"].id != "keep-me-not"
    assert by_title["bad tags"].tags == [] and by_title["bad tags"].category_id is None
    assert by_title["mixed tags"].tags == []


def test_import_garbage_is_a_soft_failure(repo, store):
    saves = store.save_count
    assert repo.import_all(b"{oops") == ImportResult()
    assert repo.import_all(b'{"title": "single object"}') == ImportResult()
    assert repo.prompts == []
    assert store.save_count == saves


def test_parse_row_defaults():
    row = parse_row({"title": "t", "content": "c"})
    assert row.tags == [] and row.category is None and row.is_favorite is False
    assert parse_row({"title": "t", "content": 5}) is None


def test_yaml_export_can_be_imported(repo, tmp_path):
    repo.add_prompt("A", "multi\nline", ["y"])
    out = tmp_path / "prompts.yaml"
    export_yaml(repo.export_records(), out)
    assert yaml.safe_load(out.read_text(encoding="utf-8"))[0]["title"] == "A"

    result = repo.import_entries(load_file(out))
    assert result.added == 1
    assert [p.content for p in repo.prompts] == ["multi\nline", "multi\nline"]


def test_load_file_rejects_unknown_suffix(tmp_path):
    f = tmp_path / "prompts.csv"
    f.write_text("title,content\n", encoding="utf-8")
    with pytest.raises(ValueError, match="csv"):
        load_file(f)


def test_helpers():
    assert default_export_filename(datetime(2024, 5, 1, 9, 5, 7)) == "prompts_2024-05-01_09-05-07.json"
    assert iso_utc(datetime(2024, 5, 1, 9, 5, 7)) == "2024-05-01T09:05:07Z"


def test_import_of_deeply_nested_json_is_a_soft_failure(repo):
    assert repo.import_all(b"[" * 100000 + b"]" * 100000) == ImportResult()
    assert repo.prompts == []


def test_import_of_database_layout_keeps_category_ids(repo):
    cat = repo.add_category("Coding")
    payload = json.dumps({"prompts": [
        {"title": "known", "content": "c", "categoryId": cat.id},
        {"title": "unknown", "content": "c", "categoryId": "no-such-id"},
    ], "categories": []}).encode("utf-8")

    assert repo.import_all(payload) == ImportResult(added=2, skipped=0)
    by_title = {p.title: p for p in repo.prompts}
    assert by_title["known"].category_id == cat.id
    assert by_title["unknown"].category_id is None
