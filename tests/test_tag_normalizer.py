from data.tag_normalizer import clean_tags, join_tags, split_tags


def test_split_trims_and_drops_empty():
    assert split_tags(" ai, nlp ;; ,writing ") == ["ai", "nlp", "writing"]
    assert split_tags("") == []
    assert split_tags(None) == []


def test_duplicates_and_order_are_kept():
    assert clean_tags(["b", "a", "b", "  ", "A"]) == ["b", "a", "b", "A"]


def test_join_roundtrip_for_editor():
    tags = ["code-review", "dev"]
    assert split_tags(join_tags(tags)) == tags


def test_plain_string_is_split_not_exploded():
    assert clean_tags("urgent") == ["urgent"]
    assert clean_tags("a, b;c") == ["a", "b", "c"]
