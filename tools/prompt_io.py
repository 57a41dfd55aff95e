"""Headless import/export for the prompt DB.

Usage:
  python -m tools.prompt_io export [--out FILE] [--yaml]
  python -m tools.prompt_io import FILE
  python -m tools.prompt_io list [--limit N] [--search TEXT] [--favorites] [--category NAME]
"""
from __future__ import annotations

# ensure repo root on sys.path when executed as module or file
import sys
from pathlib import Path
_THIS = Path(__file__).resolve()
_REPO_ROOT = _THIS.parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

import argparse, logging
from typing import List, Optional

from config.config_loader import load_config, get_settings
from data.prompt_repository import PromptRepository
from services.export_service import default_export_filename, export_yaml, write_export
from services.import_service import load_file


def _shorten(s: str, n: int) -> str:
    s = " ".join((s or "").split())
    return s if len(s) <= n else s[: max(0, n - 1)] + "…"


def cmd_export(repo: PromptRepository, args) -> int:
    out = Path(args.out) if args.out else Path(default_export_filename(suffix=".yaml" if args.yaml else ".json"))
    if args.yaml:
        export_yaml(repo.export_records(), out)
    else:
        data = repo.export_all()
        if data is None:
            print("Export failed: prompts could not be serialized", file=sys.stderr)
            return 1
        write_export(data, out)
    print(f"Exported {repo.count()} prompts to {out}")
    return 0


def cmd_import(repo: PromptRepository, args) -> int:
    try:
        raw = load_file(Path(args.file))
    except (OSError, ValueError) as e:
        print(f"Import failed: {e}", file=sys.stderr)
        return 1
    result = repo.import_entries(raw)
    print(f"Imported {result.added} prompts, skipped {result.skipped}")
    return 0


def cmd_list(repo: PromptRepository, args) -> int:
    repo.set_search_text(args.search)
    repo.set_favorites_only(args.favorites)
    if args.category:
        category = repo.category_by_name(args.category)
        if category is None:
            print(f"Unknown category: {args.category}", file=sys.stderr)
            return 1
        repo.set_selected_category(category)
    rows = repo.filtered_prompts
    if args.limit and args.limit > 0:
        rows = rows[: args.limit]
    for p in rows:
        category = repo.category_for(p)
        star = "*" if p.is_favorite else " "
        print(f"{star} {_shorten(p.title, 40):40} | {(category.name if category else ''):12} | {', '.join(p.tags)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Import/export prompts without the GUI.")
    sub = ap.add_subparsers(dest="command", required=True)

    p_exp = sub.add_parser("export", help="write all prompts to a JSON (or YAML) file")
    p_exp.add_argument("--out")
    p_exp.add_argument("--yaml", action="store_true")
    p_exp.set_defaults(func=cmd_export)

    p_imp = sub.add_parser("import", help="add prompts from a JSON/YAML export")
    p_imp.add_argument("file")
    p_imp.set_defaults(func=cmd_import)

    p_ls = sub.add_parser("list", help="show prompts, most recently updated first")
    p_ls.add_argument("--limit", type=int, default=0)
    p_ls.add_argument("--search", default="")
    p_ls.add_argument("--favorites", action="store_true")
    p_ls.add_argument("--category")
    p_ls.set_defaults(func=cmd_list)
    return ap


def main(argv: Optional[List[str]] = None, repo: Optional[PromptRepository] = None) -> int:
    args = build_parser().parse_args(argv)
    if repo is None:
        logging.basicConfig(level=logging.WARNING, format="%(asctime)s [%(levelname)s] %(message)s")
        load_config()
        repo = PromptRepository.from_settings(get_settings())
    return args.func(repo, args)


if __name__ == "__main__":
    raise SystemExit(main())
