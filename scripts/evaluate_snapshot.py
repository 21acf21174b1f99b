#!/usr/bin/env python3
"""
Evaluate indicator snapshots from a JSON file and print the decisions.

The file holds one snapshot object or a list of them, with the camelCase
keys produced by the indicator service.

Usage:
    python scripts/evaluate_snapshot.py snapshot.json --bot CONFLUENCE_2
    python scripts/evaluate_snapshot.py ticks.json --audit
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from confluence import ConfluenceError, IndicatorSnapshot
from service import SignalService, configure_logging, get_settings

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Evaluate indicator snapshots")
    parser.add_argument("snapshot", type=Path, help="JSON file with one or more snapshots")
    parser.add_argument("--bot", default=settings.default_bot, help="Bot policy name")
    parser.add_argument(
        "--policies", type=Path, default=settings.policy_file, help="Policy YAML file"
    )
    parser.add_argument("--audit", action="store_true", help="Print the full audit trace")
    parser.add_argument("--log-level", default=settings.log_level)
    args = parser.parse_args()

    configure_logging(args.log_level)

    with open(args.snapshot) as f:
        raw = json.load(f)
    payloads = raw if isinstance(raw, list) else [raw]

    try:
        service = SignalService.from_file(args.policies)
        snapshots = [IndicatorSnapshot.model_validate(p) for p in payloads]
        if args.audit:
            for snapshot in snapshots:
                report = service.audit(args.bot, snapshot)
                print(json.dumps(report.model_dump(mode="json", by_alias=True), indent=2))
        else:
            for decision in service.evaluate_many(args.bot, snapshots):
                print(json.dumps(decision.to_payload(), indent=2))
    except ValidationError as e:
        logger.error("Malformed snapshot: %s", e)
        return 1
    except ConfluenceError as e:
        logger.error("Evaluation failed: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
