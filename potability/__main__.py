#!/usr/bin/env python
"""
Potability CLI — Score One Measurement Set From the Terminal

Usage:
    python -m potability ph=7.1 hardness=95 solids=420 chloramines=2.1 \\
        sulfate=200 conductivity=350 organicCarbon=1.5 trihalomethanes=60 turbidity=0.8
    python -m potability --variant field --json ph=5 turbidity=6 chlorine=0.05 \\
        temperature=30 conductivity=900 hardness=200
    python -m potability --list
"""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from potability.config import settings
from potability.engine import ClassificationEngine, summarize
from potability.errors import PotabilityError
from potability.rules import get_registry


# Exit codes
EXIT_OK = 0
EXIT_INVALID_INPUT = 2


def parse_pairs(pairs: List[str]) -> Dict[str, str]:
    """Turn ["ph=7", "hardness=90"] into {"ph": "7", "hardness": "90"}."""
    measurements = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise argparse.ArgumentTypeError(f"expected name=value, got '{pair}'")
        measurements[name.strip()] = value
    return measurements


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="potability",
        description="Rule-based water potability prediction"
    )
    parser.add_argument(
        "measurements",
        nargs="*",
        help="Parameter values as name=value pairs"
    )
    parser.add_argument(
        "--variant", "-v",
        type=str,
        default=settings.DEFAULT_VARIANT,
        help=f"Scoring variant (default: {settings.DEFAULT_VARIANT})"
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Score non-numeric values as NaN instead of rejecting them"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as JSON"
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List variants and their parameters, then exit"
    )
    return parser


def print_variants() -> None:
    for rule_set in get_registry(settings.RULES_DIR):
        print(f"{rule_set.variant} (v{rule_set.version}, {rule_set.policy.value}, threshold {rule_set.threshold:g})")
        for rule in rule_set.rules:
            low = "" if rule.optimal_low is None else f"{rule.optimal_low:g}"
            high = "" if rule.optimal_high is None else f"{rule.optimal_high:g}"
            unit = f" {rule.unit}" if rule.unit else ""
            print(f"  {rule.name:<16} optimal [{low} .. {high}]{unit}")


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=settings.LOG_LEVEL)

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list:
        print_variants()
        return EXIT_OK

    try:
        measurements = parse_pairs(args.measurements)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    try:
        rule_set = get_registry(settings.RULES_DIR).get(args.variant)
        engine = ClassificationEngine(rule_set, strict=not args.lenient)
        result = engine.predict(measurements)
    except PotabilityError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), indent=2))
        return EXIT_OK

    print("=" * 60)
    print(f"{'POTABLE' if result.potable else 'NOT POTABLE'}  [{result.variant}]")
    print(summarize(result))
    if result.algorithm_label:
        print(f"Algorithm: {result.algorithm_label}")
    if result.risk_factors:
        print("Risk factors:")
        for factor in result.risk_factors:
            print(f"  - {factor}")
    print("=" * 60)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
