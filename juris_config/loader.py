"""
Configuration Loader (``juris_config.loader``).

Responsibility
--------------
Loads YAML configuration set files and parses them into typed
``juris_config.schema`` dataclass instances.  Runtime callers go through
``juris_config.get_active_config()`` instead of calling this directly.

Invariants enforced
-------------------
* Monetary values and rates are parsed into ``Decimal`` from their string
  form; YAML floats are converted through ``str`` so no binary rounding
  leaks in.
* Every parsed object is a frozen dataclass from ``schema.py``.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Invalid date or number  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from juris_config.schema import (
    CivilTermDef,
    ConfigScope,
    ContributionBandDef,
    CrimeDef,
    PayrollTablesDef,
    ReferenceConfigurationSet,
    WithholdingBandDef,
)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def parse_date(value: Any) -> date:
    """Parse a date from YAML (string or date object)."""
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    raise ValueError(f"Cannot parse date from {value!r}")


def parse_decimal(value: Any) -> Decimal:
    """Parse a Decimal from a YAML scalar (string, int or float)."""
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Cannot parse decimal from {value!r}")
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Cannot parse decimal from {value!r}") from e


def parse_scope(data: dict[str, Any]) -> ConfigScope:
    return ConfigScope(
        jurisdiction=data["jurisdiction"],
        currency=data["currency"],
        effective_from=parse_date(data["effective_from"]),
        effective_to=parse_date(data["effective_to"]) if data.get("effective_to") else None,
    )


def parse_payroll(data: dict[str, Any]) -> PayrollTablesDef:
    """
    Parse the payroll section.

    Raises:
        KeyError: if a table or rate is missing.
        ValueError: if a number cannot be parsed.
    """
    contribution = tuple(
        ContributionBandDef(
            upper_bound=parse_decimal(b["upper_bound"]),
            rate=parse_decimal(b["rate"]),
        )
        for b in data["contribution"]["bands"]
    )

    withholding_data = data["withholding"]
    withholding = tuple(
        WithholdingBandDef(
            upper_bound=(
                parse_decimal(b["upper_bound"]) if b.get("upper_bound") is not None else None
            ),
            rate=parse_decimal(b["rate"]),
            deduction=parse_decimal(b.get("deduction", "0")),
        )
        for b in withholding_data["bands"]
    )

    fgts = data["fgts"]
    return PayrollTablesDef(
        contribution_bands=contribution,
        withholding_bands=withholding,
        dependent_deduction=parse_decimal(withholding_data["dependent_deduction"]),
        fgts_deposit_rate=parse_decimal(fgts["deposit_rate"]),
        fgts_penalty_rate=parse_decimal(fgts["penalty_rate"]),
    )


def parse_crime(data: dict[str, Any]) -> CrimeDef:
    return CrimeDef(
        crime_id=str(data["id"]),
        article=data["article"],
        name=data["name"],
        penalty_min=parse_decimal(data["penalty_min"]),
        penalty_max=parse_decimal(data["penalty_max"]),
        legislation=data.get("legislation", ""),
    )


def parse_civil_term(data: dict[str, Any]) -> CivilTermDef:
    return CivilTermDef(
        code=data["code"],
        label=data["label"],
        years=int(data["years"]),
        article=data.get("article", ""),
    )


def parse_configuration_set(data: dict[str, Any]) -> ReferenceConfigurationSet:
    """
    Parse a full configuration set document.

    Postconditions:
        - ``checksum`` is set from the raw document.
    """
    return ReferenceConfigurationSet(
        config_id=data["config_id"],
        version=int(data.get("version", 1)),
        scope=parse_scope(data["scope"]),
        payroll=parse_payroll(data["payroll"]),
        crimes=tuple(parse_crime(c) for c in data.get("crimes", ())),
        civil_terms=tuple(parse_civil_term(t) for t in data.get("civil_terms", ())),
        checksum=compute_checksum(data),
    )


def load_configuration_set(path: Path) -> ReferenceConfigurationSet:
    """Load and parse one configuration set file."""
    return parse_configuration_set(load_yaml_file(path))


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Postconditions:
        - Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
