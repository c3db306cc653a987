#!/usr/bin/env python3
"""CLI entry point for batch-resolving ingredient names."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from tqdm import tqdm

from resolver.config import AppSettings
from resolver.engine import TextResolutionEngine, create_engine

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="[%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resolve ingredient names between the source and target languages",
    )
    parser.add_argument(
        "--input",
        help="Text file with one name per line, or a JSON list of names",
    )
    parser.add_argument("--dst", help="Path to the output JSON mapping (stdout if omitted)")
    parser.add_argument(
        "--to",
        type=str.lower,
        help="Language tag to resolve into (en or uk; defaults to the configured target)",
    )
    parser.add_argument(
        "--source-language",
        type=str.lower,
        help="Language tag of the input names (defaults to the other configured language)",
    )
    parser.add_argument("--no-progress", action="store_true", help="Disable progress bar output")
    parser.add_argument(
        "--status",
        action="store_true",
        help="Print the engine status after resolving (or alone without --input)",
    )
    return parser


def load_names(path: Path) -> List[str]:
    if not path.exists():
        raise FileNotFoundError(f"{path} not found")
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(raw)
        if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
            raise TypeError(f"{path} must contain a JSON list of strings")
        return data
    return [line.strip() for line in raw.splitlines() if line.strip()]


def resolve_names(
    engine: TextResolutionEngine,
    names: Sequence[str],
    to_language: Optional[str] = None,
    source_language: Optional[str] = None,
    show_progress: bool = True,
) -> Dict[str, str]:
    """Resolve every name into ``to_language`` (the engine's target by default)."""
    to_language = to_language or engine.target_language
    to_source = to_language == engine.source_language
    if source_language is None:
        source_language = engine.target_language if to_source else engine.source_language

    iterable = tqdm(names, desc="Resolving", unit="name") if show_progress else names
    resolved: Dict[str, str] = {}
    for name in iterable:
        if source_language == to_language:
            resolved[name] = name
        elif to_source:
            resolved[name] = engine.resolve_to_source(name, source_language)
        else:
            resolved[name] = engine.resolve_to_target(name, source_language)
    return resolved


def format_status(engine: TextResolutionEngine) -> str:
    status = engine.status()
    return json.dumps(
        {
            "isConfigured": status.configured,
            "isWorking": status.working,
            "state": status.state.value,
            "provider": status.provider,
            "staticDictionarySize": status.dictionary_size,
            "cacheSize": status.cache_size,
        },
        indent=2,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.input and not args.status:
        print("[error] Must provide --input, --status, or both")
        return 1

    try:
        settings = AppSettings.load()
    except ValueError as exc:
        print(f"[error] {exc}")
        return 1

    languages = (settings.engine.source_language, settings.engine.target_language)
    if args.to and args.to not in languages:
        print(f"[error] --to must be one of: {', '.join(languages)}")
        return 1

    try:
        engine = create_engine(settings)
    except (OSError, TypeError, ValueError) as exc:
        print(f"[error] {exc}")
        return 2

    try:
        return _run(engine, args)
    finally:
        engine.close()


def _run(engine: TextResolutionEngine, args: argparse.Namespace) -> int:
    if args.input:
        try:
            names = load_names(Path(args.input))
        except (OSError, TypeError, ValueError) as exc:
            print(f"[error] {exc}")
            return 2

        logger.info(f"Resolving {len(names)} names")
        resolved = resolve_names(
            engine,
            names,
            to_language=args.to,
            source_language=args.source_language,
            show_progress=not args.no_progress,
        )
        output = json.dumps(resolved, ensure_ascii=False, indent=2) + "\n"
        if args.dst:
            dst_path = Path(args.dst)
            dst_path.parent.mkdir(parents=True, exist_ok=True)
            dst_path.write_text(output, encoding="utf-8")
            print(f"[ok] wrote {dst_path}")
        else:
            print(output, end="")

    if args.status:
        print(format_status(engine))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
