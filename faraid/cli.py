#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from faraid.config import Settings, settings as default_settings
from faraid.services.i18n.localization import get_language_label, resolve_language
from faraid.services.inheritance import (
    DistributionFailure,
    DistributionRequest,
    calculate_distribution,
    distribution_as_dict,
    failure_as_dict,
    render_outcome,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_BAD_INPUT = 2


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="faraid-calc",
        description="Compute a Shafi'i faraid distribution from a JSON request",
    )
    parser.add_argument(
        "request",
        nargs="?",
        help="Path to the request JSON file, or - to read stdin",
    )
    parser.add_argument("--lang", help="Output language (en, ar, ml, ru)")
    parser.add_argument("--currency", help="Currency symbol or code printed with amounts")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of text",
    )
    parser.add_argument(
        "--list-languages",
        action="store_true",
        help="Print the configured languages and exit",
    )
    args = parser.parse_args(argv)
    if not args.list_languages and not args.request:
        parser.error("the request path is required")
    return args


def _read_request(source: str) -> Any:
    if source == "-":
        return json.load(sys.stdin)
    return json.loads(Path(source).read_text(encoding="utf-8"))


def _configure_logging(config: Settings) -> None:
    logging.basicConfig(level=config.log_level, format=config.log_format)


def main(argv: Optional[Sequence[str]] = None, *, config: Optional[Settings] = None) -> int:
    config = config or default_settings
    args = parse_args(argv)
    _configure_logging(config)

    if args.list_languages:
        viewer = resolve_language(args.lang, config.default_language)
        for code in config.languages:
            print(f"{code}\t{get_language_label(code, viewer)}")
        return EXIT_OK

    try:
        payload = _read_request(args.request)
        request = DistributionRequest.model_validate(payload)
    except (OSError, ValueError) as exc:
        # pydantic.ValidationError and json.JSONDecodeError are both ValueErrors.
        logger.error("Unreadable request %s: %s", args.request, exc)
        print(f"Unreadable request: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT

    language = resolve_language(args.lang, request.language, config.default_language)
    currency = args.currency if args.currency is not None else config.currency
    outcome = calculate_distribution(
        request.heir_pairs(),
        request.deceased_gender,
        request.estate_financials(),
    )

    if args.json:
        if isinstance(outcome, DistributionFailure):
            body = failure_as_dict(outcome, language=language)
        else:
            body = distribution_as_dict(outcome, language=language)
        print(json.dumps(body, ensure_ascii=False, indent=2))
    else:
        print(render_outcome(outcome, language=language, currency=currency))
    return EXIT_OK if outcome.ok else EXIT_REJECTED


if __name__ == "__main__":
    raise SystemExit(main())
