"""
Entry point for the LLM-based JSON/YAML document translator.

Usage:
    python main.py --lang es
    python main.py --lang fr --export-format YAML --protect "Acme" "{{count}}"
    python main.py --lang de --workers 4 --on-error fallback
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from tqdm import tqdm

import config
from doctranslate.base import LeafTranslator
from doctranslate.codec import coerce_to_tree, normalize_export_format, parse_document
from doctranslate.context import TranslationContext
from doctranslate.errors import DocTranslateError
from doctranslate.service import translate_document
from doctranslate.walker import LeafErrorPolicy, count_leaves

INPUT_SUFFIXES = (".json", ".yaml", ".yml")
OUTPUT_SUFFIXES = {"JSON": ".json", "YAML": ".yaml"}


class ProgressTranslator(LeafTranslator):
    """Wraps a translator and advances a tqdm bar after every leaf."""

    def __init__(self, inner: LeafTranslator, bar: tqdm) -> None:
        self._inner = inner
        self._bar = bar

    def translate(
        self,
        context: TranslationContext,
        protected_strings: Sequence[str],
    ) -> str:
        try:
            return self._inner.translate(context, protected_strings)
        finally:
            self._bar.update(1)


# ── File helpers ───────────────────────────────────────────────────────────────

def find_documents(data_dir: Path) -> list[Path]:
    """Every JSON / YAML file directly inside `data_dir`, sorted by name."""
    return sorted(p for p in data_dir.iterdir() if p.suffix.lower() in INPUT_SUFFIXES)


def output_path(
    source: Path,
    result_dir: Path,
    export_format: str,
    taken: set[Path] | None = None,
) -> Path:
    """
    `source.stem` with the export extension, e.g. en.yml → en.json.

    If that name is already in `taken` (en.json and en.yml side by side), the
    source extension is kept in the name instead: en.yml → en.yml.json.
    """
    suffix = OUTPUT_SUFFIXES[export_format]
    target = result_dir / (source.stem + suffix)
    if taken is not None and target in taken:
        target = result_dir / (source.name + suffix)
    return target


def translate_file(
    source: Path,
    target: Path,
    translator: LeafTranslator,
    args: argparse.Namespace,
) -> None:
    """Translate one document file and write the result to `target`."""
    content = source.read_text(encoding="utf-8-sig")
    input_format = args.input_format or source.suffix.lstrip(".")

    # Parsed once up front only to size the progress bar.
    try:
        total = count_leaves(coerce_to_tree(parse_document(content, input_format)))
    except DocTranslateError:
        total = None

    with tqdm(total=total, desc="  Translating leaves", unit="leaf") as bar:
        result = translate_document(
            doc_content=content,
            translator=ProgressTranslator(translator, bar),
            input_format=input_format,
            export_format=args.export_format,
            target_language=args.lang,
            protected_strings=args.protect,
            on_error=args.on_error,
            max_workers=args.workers,
        )

    target.write_text(result + "\n", encoding="utf-8")


# ── CLI ────────────────────────────────────────────────────────────────────────

def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Translate every string leaf of JSON/YAML documents with an LLM."
    )
    parser.add_argument(
        "--lang", "-l",
        default=config.DEFAULT_TARGET_LANGUAGE,
        help=f'Target language code or name, e.g. "fr", "German" (default: {config.DEFAULT_TARGET_LANGUAGE})',
    )
    parser.add_argument(
        "--export-format", "-e",
        default=config.DEFAULT_EXPORT_FORMAT,
        dest="export_format",
        help=f"Output format, JSON or YAML (default: {config.DEFAULT_EXPORT_FORMAT})",
    )
    parser.add_argument(
        "--format",
        default=None,
        choices=["json", "yaml"],
        dest="input_format",
        help="Input format hint (default: from the file extension)",
    )
    parser.add_argument(
        "--protect", "-p",
        nargs="*",
        default=[],
        help=(
            "Terms that must stay untranslated, in addition to "
            f"{', '.join(config.BUILTIN_PROTECTED_STRINGS)}"
        ),
    )
    parser.add_argument(
        "--model", "-m",
        default=None,
        help=f"Model name (default: $LLM_MODEL or {config.MODEL})",
    )
    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=config.MAX_WORKERS,
        help=f"Leaves translated concurrently (default: {config.MAX_WORKERS})",
    )
    parser.add_argument(
        "--on-error",
        default=config.ON_LEAF_ERROR,
        choices=[p.value for p in LeafErrorPolicy],
        dest="on_error",
        help=f"Failed-leaf policy (default: {config.ON_LEAF_ERROR})",
    )
    parser.add_argument(
        "--data-dir",
        default=config.DATA_DIR,
        help=f"Source data directory (default: {config.DATA_DIR})",
    )
    parser.add_argument(
        "--result-dir",
        default=config.RESULT_DIR,
        help=f"Output directory (default: {config.RESULT_DIR})",
    )
    return parser.parse_args(argv)


# ── Main ───────────────────────────────────────────────────────────────────────

def main(argv: Sequence[str] | None = None, translator: LeafTranslator | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    try:
        args.export_format = normalize_export_format(args.export_format)
    except DocTranslateError as exc:
        print(f"[ERROR] {exc}")
        return 1

    data_dir   = Path(args.data_dir)
    result_dir = Path(args.result_dir)

    if not data_dir.exists():
        print(f"[ERROR] Data directory not found: {data_dir}")
        return 1

    result_dir.mkdir(parents=True, exist_ok=True)

    documents = find_documents(data_dir)
    if not documents:
        print(f"[WARN] No JSON/YAML files found in '{data_dir}'.")
        return 0

    if translator is None:
        from doctranslate.client import OpenAITranslator
        translator = OpenAITranslator(target_language=args.lang, model=args.model)

    print(f"Target language : {args.lang}")
    print(f"Export format   : {args.export_format}")
    print(f"Protected terms : {args.protect if args.protect else '(built-in only)'}")
    print(f"Workers         : {args.workers}")
    print(f"On leaf error   : {args.on_error}")
    print(f"Files found     : {len(documents)}\n")

    failures = 0
    taken: set[Path] = set()
    for source in documents:
        print(f"Processing: {source.name}")
        target = output_path(source, result_dir, args.export_format, taken)
        if target.name != source.stem + OUTPUT_SUFFIXES[args.export_format]:
            print(f"  [WARN] Output name already used, writing {target.name} instead")
        taken.add(target)
        try:
            translate_file(source, target, translator, args)
        except DocTranslateError as exc:
            failures += 1
            label = "Invalid document" if exc.is_client_error else "Translation failed"
            print(f"  [ERROR] {label}: {exc}\n")
            continue
        except (OSError, UnicodeDecodeError) as exc:
            failures += 1
            print(f"  [ERROR] Unreadable file: {exc}\n")
            continue
        print(f"  Saved → {target}\n")

    print("Done." if not failures else f"Done with {failures} failed file(s).")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
