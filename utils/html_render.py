from __future__ import annotations

from typing import Optional
from html import escape

from models.prompt import Category, Prompt


def _badge(text: str, color: str = "#EAF2FF") -> str:
    t = escape(text)
    return f'<span style="display:inline-block;margin:2px 6px 2px 0;padding:2px 8px;border-radius:10px;background:{escape(color)};color:#1F2937;font-size:12px;border:1px solid #D6E4FF;">{t}</span>'


def _mono_block(text: str) -> str:
    t = escape(text)
    return f'<pre style="white-space:pre-wrap;background:#0b12201a;border:1px solid #e5e7eb;border-radius:8px;padding:10px;margin-top:6px;">{t}</pre>'


def _when(value) -> str:
    return value.astimezone().strftime("%Y-%m-%d %H:%M")


def render_details(prompt: Optional[Prompt], category: Optional[Category] = None) -> str:
    if not prompt:
        return '<div style="color:#6B7280">Select a prompt to view details.<br><small>Use Ctrl+N to create a new prompt.</small></div>'
    star = "★ " if prompt.is_favorite else ""
    title = escape(prompt.title or "(untitled)")
    cat_html = _badge(category.name, category.color or "#EAF2FF") if category else '<span style="color:#9CA3AF">–</span>'
    tag_html = " ".join(_badge(t) for t in prompt.tags) if prompt.tags else '<span style="color:#9CA3AF">–</span>'

    parts = [
        f'<h2 style="margin:0 0 4px 0;font-size:18px;">{star}{title}</h2>',
        f'<div style="margin:0 0 10px 0;color:#374151;"><strong>Category:</strong> {cat_html}</div>',
        f'<div style="margin:0 0 6px 0;"><strong>Tags:</strong> {tag_html}</div>',
        _mono_block(prompt.content),
        f'<div style="margin-top:10px;color:#6B7280;font-size:11px;">Created {_when(prompt.created_at)} · Updated {_when(prompt.updated_at)}</div>',
    ]
    return "<div>" + "\n".join(parts) + "</div>"
