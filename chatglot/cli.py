"""Command line interface for the Chatglot translator."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Iterable, Optional

from .configuration import get_settings
from .errors import TranslationProviderConfigurationError
from .providers import build_provider
from .store import annotate
from .structures import TranslationSuccess
from .translator import MessageTranslator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chatglot",
        description=(
            "Translate a chat message while keeping mentions, emoji and "
            "formatting intact."
        ),
    )
    parser.add_argument(
        "text",
        nargs="?",
        help="The message to translate. Reads standard input when omitted.",
    )
    parser.add_argument(
        "-t",
        "--to",
        dest="target_language",
        help="The language to translate to (defaults to the configured language).",
    )
    parser.add_argument(
        "-s",
        "--from",
        dest="source_language",
        help="The language to translate from (default: auto).",
    )
    parser.add_argument(
        "-p",
        "--provider",
        help="Translation provider identifier (default: configured provider).",
    )
    parser.add_argument(
        "--annotate",
        action="store_true",
        help="Append the detected and target languages to the output.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result record as JSON.",
    )
    parser.add_argument(
        "--debug-provider",
        action="store_true",
        help="Log complete provider requests and responses for troubleshooting.",
    )
    return parser


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    text = args.text if args.text is not None else sys.stdin.read()

    try:
        settings = get_settings()
        provider = build_provider(
            args.provider or settings.CHATGLOT_PROVIDER,
            settings=settings,
            debug=bool(args.debug_provider),
        )
    except TranslationProviderConfigurationError as exc:
        print(exc, file=sys.stderr)
        return 1

    translator = MessageTranslator(provider=provider, settings=settings)
    result = translator.translate(text, args.source_language, args.target_language)

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    elif isinstance(result, TranslationSuccess):
        print(annotate(result) if args.annotate else result.translated_text)
    else:
        print(result, file=sys.stderr)

    return 0 if isinstance(result, TranslationSuccess) else 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
