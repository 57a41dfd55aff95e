from models.prompt import Category, Prompt
from utils.html_render import render_details


def test_render_empty_selection():
    assert "Select a prompt" in render_details(None)


def test_render_escapes_and_shows_category_and_tags():
    cat = Category(name="Coding", color="#4ECDC4")
    p = Prompt(title="<b>Review</b>", content="if a < b:", tags=["dev"], category_id=cat.id, is_favorite=True)
    html = render_details(p, cat)
    assert "&lt;b&gt;Review&lt;/b&gt;" in html
    assert "if a &lt; b:" in html
    assert "Coding" in html and "dev" in html
    assert "★" in html
