"""
juris_services.calculator_service -- Form intake for the calculation engines.

Responsibility:
    Accept the raw strings typed into the calculator forms, parse them
    into typed values, build the immutable engine inputs, and run the
    engines.  Also exposes the crime and civil-term catalogs that the
    forms offer as choices.

Architecture position:
    Services -- orchestration over config + engines + kernel.
    Receives a ``ReferenceConfigurationSet`` and a ``Clock`` via
    constructor injection; the engines themselves stay pure.

Invariants enforced:
    - Monetary strings are parsed with the pt-BR convention and never pass
      through ``float``.
    - The evaluation date for prescription comes from the injected clock,
      never from the system time directly.
    - A dosimetry request without a base penalty starts at the crime's
      legal minimum.

Failure modes:
    - FormatError subclasses for unparseable form values.
    - CrimeNotFoundError for an unknown crime id.
    - ValidationError subclasses propagated unchanged from the engines.

Usage:
    from juris_config import get_active_config
    from juris_services import CalculatorService

    service = CalculatorService(get_active_config())
    result = service.compute_termination(
        admission_date="10/01/2022",
        termination_date="20/03/2024",
        gross_salary="3.000,00",
    )
"""

from __future__ import annotations

import unicodedata
from datetime import date

from juris_config.bridges import build_crime_catalog, build_payroll_tables
from juris_config.schema import CivilTermDef, ReferenceConfigurationSet
from juris_engines.dosimetry import (
    CrimeRecord,
    DosimetryCalculator,
    DosimetryInput,
    DosimetryResult,
)
from juris_engines.limitation import (
    LimitationCalculator,
    LimitationInput,
    LimitationResult,
)
from juris_engines.termination import (
    ContractPeriod,
    TerminationCalculator,
    TerminationResult,
)
from juris_kernel.domain.clock import Clock, SystemClock
from juris_kernel.domain.parsing import (
    parse_amount,
    parse_count,
    parse_date,
    parse_decimal,
    parse_optional_amount,
)
from juris_kernel.exceptions import CrimeNotFoundError
from juris_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.calculator")


def _fold(text: str) -> str:
    """Lower-case and strip accents so 'receptacao' finds 'Receptação'."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


class CalculatorService:
    """
    Entry point for the calculator forms.

    Contract:
        Stateless between calls apart from the injected configuration and
        clock.  Each ``compute_*`` method parses, calls one engine, logs
        one ``info`` line, and returns the engine's result unchanged.
    Non-goals:
        - Does not round or format amounts for display.
        - Does not persist anything.
    """

    def __init__(self, config: ReferenceConfigurationSet, clock: Clock | None = None):
        self._config = config
        self._clock = clock or SystemClock()
        self._termination = TerminationCalculator(build_payroll_tables(config))
        self._dosimetry = DosimetryCalculator()
        self._limitation = LimitationCalculator()
        self._crimes = build_crime_catalog(config)

    @property
    def config(self) -> ReferenceConfigurationSet:
        return self._config

    # -- catalogs -----------------------------------------------------------

    def search_crimes(self, term: str = "") -> tuple[CrimeRecord, ...]:
        """Crimes whose name or article contains ``term``; blank returns all."""
        needle = _fold(term.strip())
        if not needle:
            return self._crimes
        return tuple(
            c for c in self._crimes
            if needle in _fold(c.name) or needle in _fold(c.article)
        )

    def get_crime(self, crime_id: str) -> CrimeRecord:
        for crime in self._crimes:
            if crime.crime_id == str(crime_id):
                return crime
        raise CrimeNotFoundError(str(crime_id))

    def civil_terms(self) -> tuple[CivilTermDef, ...]:
        return self._config.civil_terms

    # -- calculations -------------------------------------------------------

    def compute_termination(
        self,
        admission_date: str | date,
        termination_date: str | date,
        gross_salary: str,
        dependents: str | int = "0",
        fgts_balance: str | None = "",
        termination_reason: str = "without_cause",
        has_expired_vacation: bool = False,
    ) -> TerminationResult:
        contract = ContractPeriod(
            admission_date=parse_date(admission_date),
            termination_date=parse_date(termination_date),
            gross_salary=parse_amount(gross_salary),
            dependents_count=parse_count(dependents),
            fgts_balance=parse_optional_amount(fgts_balance),
            termination_reason=termination_reason,
            has_expired_vacation=has_expired_vacation,
        )
        with LogContext.bind(calculation="termination"):
            result = self._termination.compute(contract)
            logger.info("termination_calculated", extra={
                "termination_reason": contract.termination_reason.value,
                "total_gross": str(result.total_gross),
                "total_net": str(result.total_net),
            })
        return result

    def compute_dosimetry(
        self,
        crime_id: str,
        base_penalty: str | None = None,
        aggravating_count: str | int = "0",
        mitigating_count: str | int = "0",
        increase_fraction: str = "0",
        decrease_fraction: str = "0",
    ) -> DosimetryResult:
        """
        Run the three-phase calculation for a catalogued crime.

        A blank ``base_penalty`` starts from the crime's minimum.
        """
        crime = self.get_crime(crime_id)
        if base_penalty is None or not str(base_penalty).strip():
            base = crime.penalty_min
        else:
            base = parse_decimal(base_penalty)

        dosimetry_input = DosimetryInput(
            crime=crime,
            base_penalty=base,
            aggravating_count=parse_count(aggravating_count),
            mitigating_count=parse_count(mitigating_count),
            increase_fraction=increase_fraction,
            decrease_fraction=decrease_fraction,
        )
        with LogContext.bind(calculation="dosimetry"):
            result = self._dosimetry.compute(dosimetry_input)
            logger.info("dosimetry_calculated", extra={
                "crime_id": crime.crime_id,
                "final_penalty": str(result.final_penalty),
                "regime": result.regime.value,
            })
        return result

    def compute_criminal_limitation(
        self,
        max_abstract_penalty: str,
        start_date: str | date,
        reduced_term: bool = False,
    ) -> LimitationResult:
        limitation_input = LimitationInput.criminal(
            max_abstract_penalty=parse_decimal(max_abstract_penalty),
            start_date=parse_date(start_date),
            evaluation_date=self._clock.today(),
            reduced_term=reduced_term,
        )
        return self._run_limitation(limitation_input)

    def compute_civil_limitation(
        self,
        term_years: str | int,
        start_date: str | date,
    ) -> LimitationResult:
        limitation_input = LimitationInput.civil(
            term_years=parse_count(term_years),
            start_date=parse_date(start_date),
            evaluation_date=self._clock.today(),
        )
        return self._run_limitation(limitation_input)

    def _run_limitation(self, limitation_input: LimitationInput) -> LimitationResult:
        with LogContext.bind(calculation="limitation"):
            result = self._limitation.compute(limitation_input)
            logger.info("limitation_calculated", extra={
                "kind": limitation_input.kind.value,
                "deadline_date": result.deadline_date.isoformat(),
                "expired": result.expired,
            })
        return result
