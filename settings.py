"""Defaults for the console front end and logging setup.

Settings are read from ``card_config.json`` next to this module when it
exists. Any key left out of the file keeps its default.
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from time_helper import parse_timestamp
from transaction import to_money

CONFIG_FILE = Path(__file__).with_name("card_config.json")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class CardConfig:
    """Account defaults offered by the console."""

    apr: Decimal = Decimal("0.35")
    credit_limit: Decimal = Decimal("1000")
    # Midnight, February 27 2012 GMT.
    start_date: datetime = field(default_factory=lambda: parse_timestamp(1330300800))
    log_level: str = "WARNING"
    enforce_limits_on_corrections: bool = False


def load_config(path: str | Path = CONFIG_FILE) -> CardConfig:
    """Load a :class:`CardConfig` from a JSON file, falling back to defaults."""
    path = Path(path)
    config = CardConfig()
    if not path.exists():
        return config

    with path.open() as f:
        raw = json.load(f)

    if "apr" in raw:
        config.apr = to_money(raw["apr"], "APR")
    if "credit_limit" in raw:
        config.credit_limit = to_money(raw["credit_limit"], "credit limit")
    if "start_date" in raw:
        config.start_date = parse_timestamp(raw["start_date"])
    if "log_level" in raw:
        config.log_level = str(raw["log_level"]).upper()
        _log_level(config.log_level)
    if "enforce_limits_on_corrections" in raw:
        config.enforce_limits_on_corrections = bool(raw["enforce_limits_on_corrections"])
    return config


def _log_level(level: str) -> int:
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return numeric


def setup_logging(level: str = "WARNING") -> None:
    """Configure application logging on stderr, away from the prompts."""
    logging.basicConfig(
        level=_log_level(level),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )
