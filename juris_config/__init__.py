"""
juris_config -- single public entrypoint for reference configuration.

Responsibility:
    Provides the ONLY way to obtain reference data at runtime through
    ``get_active_config()``: yearly payroll tables, the crime catalog and
    the civil prescription terms.  YAML loading is internal tooling.

Architecture position:
    Configuration -- YAML-driven reference data.  Sits above
    ``juris_kernel`` and ``juris_engines`` and below ``juris_services``.
    Engines MUST NEVER import from ``juris_config``; the bridges in this
    package translate configuration into engine inputs.

Invariants enforced:
    - Single entrypoint: all runtime reference data flows through
      ``get_active_config()``.
    - A set is returned only after it passes validation.
    - Deterministic identity: the same YAML always yields the same
      checksum.

Failure modes:
    - ``FileNotFoundError`` -- no configuration set covers the requested
      date.
    - ``ValueError`` -- schema or structural validation failures.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``JURIS_CONFIG_TRACE`` log entry with config_id, version and
    checksum, tying each calculation to the tables that produced it.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from juris_config.loader import load_configuration_set
from juris_config.schema import ReferenceConfigurationSet
from juris_config.validator import validate_configuration

_logger = logging.getLogger("juris_kernel.config")

# Default configuration sets directory
_DEFAULT_CONFIG_DIR = Path(__file__).parent / "sets"


def get_active_config(
    as_of_date: date | None = None,
    config_dir: Path | None = None,
) -> ReferenceConfigurationSet:
    """The ONLY public configuration entrypoint.

    Contract:
        Loads every ``*.yaml`` set in the directory and selects the one
        whose scope covers ``as_of_date``; when several do, the most
        recent ``effective_from`` wins.  With no date, the set with the
        most recent ``effective_from`` is returned.

    Non-goals:
        Does NOT cache; callers hold the returned set for as long as they
        need it.

    Raises:
        FileNotFoundError: If no matching configuration set is found.
        ValueError: If configuration validation fails.
    """
    sets_dir = config_dir or _DEFAULT_CONFIG_DIR
    config = _find_matching_config(sets_dir, as_of_date)

    validation = validate_configuration(config)
    if not validation.is_valid:
        raise ValueError(
            "Configuration validation failed:\n"
            + "\n".join(f"  - {e}" for e in validation.errors)
        )
    for warning in validation.warnings:
        _logger.warning("config_validation_warning", extra={"warning": warning})

    _logger.info(
        "JURIS_CONFIG_TRACE",
        extra={
            "trace_type": "JURIS_CONFIG_TRACE",
            "config_set_id": config.config_id,
            "config_version": config.version,
            "checksum": config.checksum,
            "jurisdiction": config.scope.jurisdiction,
            "effective_from": config.scope.effective_from.isoformat(),
            "crime_count": len(config.crimes),
            "civil_term_count": len(config.civil_terms),
        },
    )
    return config


def _find_matching_config(
    sets_dir: Path,
    as_of_date: date | None,
) -> ReferenceConfigurationSet:
    candidates = [
        load_configuration_set(path) for path in sorted(sets_dir.glob("*.yaml"))
    ]
    if as_of_date is not None:
        candidates = [c for c in candidates if c.scope.covers(as_of_date)]
    if not candidates:
        raise FileNotFoundError(
            f"No configuration set in {sets_dir} covers {as_of_date or 'any date'}"
        )
    return max(candidates, key=lambda c: c.scope.effective_from)


__all__ = ["get_active_config", "ReferenceConfigurationSet"]
