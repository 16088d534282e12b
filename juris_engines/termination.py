"""
Module: juris_engines.termination
Responsibility:
    Severance-pay engine for the termination of an employment contract.
    Computes every earning line (salary balance, notice period,
    proportional 13th salary, proportional and expired vacation with the
    one-third bonus, FGTS penalty), the INSS and IRRF deductions, and the
    gross / deductions / net totals.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Uses juris_engines.dates for tenure and month counting and
    juris_engines.brackets for the contribution and withholding tables.

Invariants enforced:
    - Purity: the result is a function of (ContractPeriod, PayrollTables).
    - Decimal-only arithmetic; amounts are returned unrounded.
    - Every line is computed independently from the validated contract.
    - Proportional vacation and its bonus are zero for just cause; the
      proportional 13th salary is not.

Failure modes:
    - TerminationBeforeAdmissionError, NonPositiveSalaryError and
      NegativeValueError from ``compute`` on invalid contracts.
    - DisallowedValueError from ``ContractPeriod`` for an unknown
      termination reason.

Usage:
    from juris_config import get_active_config
    from juris_config.bridges import build_payroll_tables
    from juris_engines.termination import ContractPeriod, TerminationCalculator

    calculator = TerminationCalculator(build_payroll_tables(get_active_config()))
    result = calculator.compute(ContractPeriod(
        admission_date=date(2022, 1, 10),
        termination_date=date(2024, 3, 20),
        gross_salary=Decimal("3000.00"),
        termination_reason="without_cause",
    ))
    result.total_net
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from juris_engines.brackets import (
    ProgressiveBand,
    WithholdingTable,
    cumulative_progressive,
    single_bracket,
    validate_progressive_bands,
)
from juris_engines.dates import (
    Tenure,
    anniversary_on_or_before,
    months_elapsed,
    tenure,
)
from juris_engines.tracer import traced_engine
from juris_kernel.exceptions import (
    DisallowedValueError,
    NegativeValueError,
    NonPositiveSalaryError,
    TerminationBeforeAdmissionError,
)
from juris_kernel.logging_config import get_logger

logger = get_logger("engines.termination")

_ZERO = Decimal("0")

# Notice period: 30 days plus 3 per full year of service, up to 90.
NOTICE_BASE_DAYS = 30
NOTICE_DAYS_PER_YEAR = 3
NOTICE_MAX_DAYS = 90

DAYS_IN_PAY_MONTH = Decimal("30")
MONTHS_IN_YEAR = Decimal("12")
MAX_VACATION_MONTHS = 12
VACATION_BONUS_DIVISOR = Decimal("3")


class TerminationReason(str, Enum):
    """Why the contract ended. Values are part of the external contract."""

    WITHOUT_CAUSE = "without_cause"
    RESIGNATION = "resignation"
    JUST_CAUSE = "just_cause"
    MUTUAL_AGREEMENT = "mutual_agreement"


@dataclass(frozen=True)
class PayrollTables:
    """Year-specific tables and rates used by the termination engine."""

    contribution_bands: tuple[ProgressiveBand, ...]
    withholding: WithholdingTable
    fgts_deposit_rate: Decimal = Decimal("0.08")
    fgts_penalty_rate: Decimal = Decimal("0.40")

    def __post_init__(self) -> None:
        validate_progressive_bands(self.contribution_bands)


@dataclass(frozen=True)
class ContractPeriod:
    """
    Immutable description of the employment contract being terminated.

    ``termination_reason`` accepts the enum or its literal value.
    ``fgts_balance`` of None (or zero) means the balance is unknown and the
    FGTS penalty is estimated from months worked.
    """

    admission_date: date
    termination_date: date
    gross_salary: Decimal
    dependents_count: int = 0
    fgts_balance: Decimal | None = None
    termination_reason: TerminationReason = TerminationReason.WITHOUT_CAUSE
    has_expired_vacation: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.termination_reason, TerminationReason):
            try:
                reason = TerminationReason(self.termination_reason)
            except ValueError as e:
                raise DisallowedValueError(
                    "termination_reason",
                    self.termination_reason,
                    tuple(r.value for r in TerminationReason),
                ) from e
            object.__setattr__(self, "termination_reason", reason)


@dataclass(frozen=True)
class TerminationResult:
    """
    Complete severance computation.

    Earnings: balance_of_salary, notice_pay, thirteenth_salary,
    proportional_vacation, vacation_bonus, expired_vacation,
    expired_vacation_bonus, fgts_penalty.
    Deductions: inss, irrf (each split by base in the ``*_salary`` and
    ``*_thirteenth`` fields).
    """

    tenure: Tenure

    balance_of_salary: Decimal
    notice_days: int
    notice_pay: Decimal
    thirteenth_months: int
    thirteenth_salary: Decimal
    vacation_months: int
    proportional_vacation: Decimal
    vacation_bonus: Decimal
    expired_vacation: Decimal
    expired_vacation_bonus: Decimal
    fgts_penalty: Decimal

    inss_salary: Decimal
    inss_thirteenth: Decimal
    irrf_salary: Decimal
    irrf_thirteenth: Decimal

    @property
    def inss(self) -> Decimal:
        return self.inss_salary + self.inss_thirteenth

    @property
    def irrf(self) -> Decimal:
        return self.irrf_salary + self.irrf_thirteenth

    @property
    def total_gross(self) -> Decimal:
        return (
            self.balance_of_salary
            + self.notice_pay
            + self.thirteenth_salary
            + self.proportional_vacation
            + self.vacation_bonus
            + self.expired_vacation
            + self.expired_vacation_bonus
            + self.fgts_penalty
        )

    @property
    def total_deductions(self) -> Decimal:
        return self.inss + self.irrf

    @property
    def total_net(self) -> Decimal:
        return self.total_gross - self.total_deductions


class TerminationCalculator:
    """
    Compute severance pay for a terminated contract.

    Contract:
        Pure functions -- no I/O.  Tables are injected at construction;
        the calculator holds no state that changes between calls.
    Guarantees:
        - ``compute`` returns a fresh, immutable ``TerminationResult``.
        - Identical inputs produce field-for-field identical results.
    """

    def __init__(self, tables: PayrollTables):
        self._tables = tables

    @property
    def tables(self) -> PayrollTables:
        return self._tables

    @traced_engine("termination", "1.0", fingerprint_fields=("contract",))
    def compute(self, contract: ContractPeriod) -> TerminationResult:
        """
        Validate the contract and compute every line.

        Raises:
            TerminationBeforeAdmissionError: termination precedes admission.
            NonPositiveSalaryError: gross salary <= 0.
            NegativeValueError: negative dependents or FGTS balance.
        """
        self._validate(contract)

        service = tenure(contract.admission_date, contract.termination_date)
        salary = contract.gross_salary
        reason = contract.termination_reason

        balance = self.balance_of_salary(salary, contract.termination_date)

        notice_days = self.notice_days(service)
        notice_pay = _ZERO
        if reason is TerminationReason.WITHOUT_CAUSE:
            notice_pay = salary / DAYS_IN_PAY_MONTH * notice_days

        thirteenth_months = self.thirteenth_months(contract.termination_date)
        thirteenth = salary / MONTHS_IN_YEAR * thirteenth_months

        vacation_months = self.vacation_months(
            contract.admission_date, contract.termination_date,
        )
        vacation = salary / MONTHS_IN_YEAR * vacation_months
        if reason is TerminationReason.JUST_CAUSE:
            vacation = _ZERO
        vacation_bonus = vacation / VACATION_BONUS_DIVISOR

        expired = _ZERO
        expired_bonus = _ZERO
        if contract.has_expired_vacation and reason is not TerminationReason.JUST_CAUSE:
            expired = salary
            expired_bonus = salary / VACATION_BONUS_DIVISOR

        fgts_penalty = _ZERO
        if reason is TerminationReason.WITHOUT_CAUSE:
            fgts_penalty = self.fgts_penalty(contract)

        inss_salary = cumulative_progressive(balance, self._tables.contribution_bands)
        inss_thirteenth = cumulative_progressive(thirteenth, self._tables.contribution_bands)
        irrf_salary = self.withholding(balance - inss_salary, contract.dependents_count)
        irrf_thirteenth = self.withholding(
            thirteenth - inss_thirteenth, contract.dependents_count,
        )

        result = TerminationResult(
            tenure=service,
            balance_of_salary=balance,
            notice_days=notice_days,
            notice_pay=notice_pay,
            thirteenth_months=thirteenth_months,
            thirteenth_salary=thirteenth,
            vacation_months=vacation_months,
            proportional_vacation=vacation,
            vacation_bonus=vacation_bonus,
            expired_vacation=expired,
            expired_vacation_bonus=expired_bonus,
            fgts_penalty=fgts_penalty,
            inss_salary=inss_salary,
            inss_thirteenth=inss_thirteenth,
            irrf_salary=irrf_salary,
            irrf_thirteenth=irrf_thirteenth,
        )

        logger.debug("termination_computed", extra={
            "termination_reason": reason.value,
            "tenure_years": service.years,
            "notice_days": notice_days,
            "thirteenth_months": thirteenth_months,
            "vacation_months": vacation_months,
            "total_gross": str(result.total_gross),
            "total_deductions": str(result.total_deductions),
        })
        return result

    # -- individual lines ---------------------------------------------------

    @staticmethod
    def balance_of_salary(salary: Decimal, termination_date: date) -> Decimal:
        """Pay for the days worked in the termination month."""
        return salary / DAYS_IN_PAY_MONTH * termination_date.day

    @staticmethod
    def notice_days(service: Tenure) -> int:
        return min(NOTICE_BASE_DAYS + NOTICE_DAYS_PER_YEAR * service.years, NOTICE_MAX_DAYS)

    @staticmethod
    def thirteenth_months(termination_date: date) -> int:
        """Months of the termination year counted for the 13th salary."""
        year_start = date(termination_date.year, 1, 1)
        return months_elapsed(year_start, termination_date)

    @staticmethod
    def vacation_months(admission_date: date, termination_date: date) -> int:
        """
        Months since the last anniversary, capped at a full vacation year.

        A Feb 29 admission has its anniversary on Feb 28 in common years, so
        the count restarts there.
        """
        anniversary = anniversary_on_or_before(admission_date, termination_date)
        return min(months_elapsed(anniversary, termination_date), MAX_VACATION_MONTHS)

    def fgts_penalty(self, contract: ContractPeriod) -> Decimal:
        """
        Penalty on the FGTS balance.

        Without a known balance, the balance is estimated as monthly
        deposits over the whole months worked (no 15th-day round-up).
        """
        rate = self._tables.fgts_penalty_rate
        if contract.fgts_balance:
            return contract.fgts_balance * rate

        months_worked = months_elapsed(
            contract.admission_date, contract.termination_date, round_up_from_day=None,
        )
        estimated_balance = contract.gross_salary * self._tables.fgts_deposit_rate * months_worked
        return estimated_balance * rate

    def withholding(self, amount: Decimal, dependents: int) -> Decimal:
        table = self._tables.withholding
        return single_bracket(table.taxable_base(amount, dependents), table.bands)

    # -- validation ---------------------------------------------------------

    @staticmethod
    def _validate(contract: ContractPeriod) -> None:
        if contract.termination_date < contract.admission_date:
            raise TerminationBeforeAdmissionError(
                contract.admission_date, contract.termination_date,
            )
        if contract.gross_salary <= _ZERO:
            raise NonPositiveSalaryError(contract.gross_salary)
        if contract.dependents_count < 0:
            raise NegativeValueError("dependents_count", contract.dependents_count)
        if contract.fgts_balance is not None and contract.fgts_balance < _ZERO:
            raise NegativeValueError("fgts_balance", contract.fgts_balance)
