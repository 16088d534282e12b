"""
Module: juris_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    legal-computation engines.  This is the import surface for
    juris_services and for presentation-layer adapters.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import juris_kernel (and sibling engine modules).
    MUST NOT import juris_config or juris_services.

Invariants enforced:
    - Purity: engines never read the system clock; evaluation dates are
      explicit input fields.
    - Decimal arithmetic for money, Fraction arithmetic for penalties;
      floats are never used.
    - Determinism: identical inputs always produce identical outputs.

Audit relevance:
    Every ``compute`` call is traced via ``@traced_engine`` (see
    ``juris_engines.tracer``), emitting a JURIS_ENGINE_TRACE log record.

Usage:
    from juris_engines import DosimetryCalculator, DosimetryInput, CrimeRecord
    from juris_engines import LimitationCalculator, LimitationInput
    from juris_engines import TerminationCalculator, ContractPeriod
"""

from juris_engines.brackets import (
    ProgressiveBand,
    WithholdingBand,
    WithholdingTable,
    cumulative_progressive,
    single_bracket,
)
from juris_engines.dates import (
    Tenure,
    add_years,
    anniversary_on_or_before,
    days_between,
    months_elapsed,
    tenure,
)
from juris_engines.dosimetry import (
    CrimeRecord,
    DosimetryCalculator,
    DosimetryInput,
    DosimetryResult,
    PenaltyFraction,
    PrisonRegime,
    format_years,
)
from juris_engines.limitation import (
    CIVIL_TERM_YEARS,
    LimitationCalculator,
    LimitationInput,
    LimitationKind,
    LimitationResult,
    criminal_period,
)
from juris_engines.termination import (
    ContractPeriod,
    PayrollTables,
    TerminationCalculator,
    TerminationReason,
    TerminationResult,
)

__all__ = [
    # Brackets
    "ProgressiveBand",
    "WithholdingBand",
    "WithholdingTable",
    "cumulative_progressive",
    "single_bracket",
    # Dates
    "Tenure",
    "add_years",
    "anniversary_on_or_before",
    "days_between",
    "months_elapsed",
    "tenure",
    # Dosimetry
    "CrimeRecord",
    "DosimetryCalculator",
    "DosimetryInput",
    "DosimetryResult",
    "PenaltyFraction",
    "PrisonRegime",
    "format_years",
    # Limitation
    "CIVIL_TERM_YEARS",
    "LimitationCalculator",
    "LimitationInput",
    "LimitationKind",
    "LimitationResult",
    "criminal_period",
    # Termination
    "ContractPeriod",
    "PayrollTables",
    "TerminationCalculator",
    "TerminationReason",
    "TerminationResult",
]
