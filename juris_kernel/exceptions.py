"""
Typed Exception Hierarchy for the legal-computation kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers (the presentation layer, API adapters, tests) must tell apart an
input the user typed wrongly from an input that parses but is legally
inconsistent. Catching by type and reading structured attributes avoids
parsing message strings.

Every exception:
  1. Has a TYPED class (catch by type, not message)
  2. Has a CODE class attribute (machine-readable, API-safe)
  3. Carries structured DATA as attributes

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    JurisKernelError (base)
    |
    +-- ValidationError
    |   +-- TerminationBeforeAdmissionError
    |   +-- NonPositiveSalaryError
    |   +-- NegativeValueError
    |   +-- InvalidPenaltyRangeError
    |   +-- PenaltyOutOfRangeError
    |   +-- DisallowedValueError
    |   +-- MissingFieldError
    |
    +-- FormatError
    |   +-- AmountFormatError
    |   +-- NumberFormatError
    |   +-- DateFormatError
    |
    +-- CatalogError
        +-- CrimeNotFoundError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category     | Code                          | When Raised
-------------|-------------------------------|------------------------------------
Validation   | TERMINATION_BEFORE_ADMISSION  | Termination date < admission date
             | NON_POSITIVE_SALARY           | Gross salary <= 0
             | NEGATIVE_VALUE                | Count or amount below zero
             | INVALID_PENALTY_RANGE         | Crime minimum > maximum, or < 0
             | PENALTY_OUT_OF_RANGE          | Base penalty outside crime range
             | DISALLOWED_VALUE              | Value outside an enumerated set
             | MISSING_FIELD                 | Branch-required field absent
-------------|-------------------------------|------------------------------------
Format       | AMOUNT_FORMAT_ERROR           | Money string not pt-BR formatted
             | NUMBER_FORMAT_ERROR           | Count / years string unparseable
             | DATE_FORMAT_ERROR             | Date string unparseable
-------------|-------------------------------|------------------------------------
Catalog      | CRIME_NOT_FOUND               | Unknown crime id

===============================================================================
HANDLING PATTERNS
===============================================================================

    try:
        result = service.compute_termination(**form)
    except FormatError as e:
        highlight_field(e.raw_value)          # before any engine logic ran
    except ValidationError as e:
        show_message(e.code)                  # engine refused the input

FormatError is always raised before an engine is invoked. ValidationError
aborts the computation; no partial result is ever returned.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any


class JurisKernelError(Exception):
    """
    Base exception for all kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "JURIS_KERNEL_ERROR"


# Validation exceptions


class ValidationError(JurisKernelError):
    """Base exception for out-of-range or inconsistent engine inputs."""

    code: str = "VALIDATION_ERROR"


class TerminationBeforeAdmissionError(ValidationError):
    """Termination date precedes the admission date."""

    code: str = "TERMINATION_BEFORE_ADMISSION"

    def __init__(self, admission_date: date, termination_date: date):
        self.admission_date = admission_date
        self.termination_date = termination_date
        super().__init__(
            f"Termination date {termination_date.isoformat()} is before "
            f"admission date {admission_date.isoformat()}"
        )


class NonPositiveSalaryError(ValidationError):
    """Gross salary must be strictly positive."""

    code: str = "NON_POSITIVE_SALARY"

    def __init__(self, gross_salary: Decimal):
        self.gross_salary = str(gross_salary)
        super().__init__(f"Gross salary must be positive, got {gross_salary}")


class NegativeValueError(ValidationError):
    """A count or amount that must be >= 0 is negative."""

    code: str = "NEGATIVE_VALUE"

    def __init__(self, field_name: str, value: Any):
        self.field_name = field_name
        self.value = str(value)
        super().__init__(f"{field_name} cannot be negative, got {value}")


class InvalidPenaltyRangeError(ValidationError):
    """Crime penalty range is malformed (min > max or min < 0)."""

    code: str = "INVALID_PENALTY_RANGE"

    def __init__(self, penalty_min: Any, penalty_max: Any):
        self.penalty_min = str(penalty_min)
        self.penalty_max = str(penalty_max)
        super().__init__(
            f"Invalid penalty range [{penalty_min}, {penalty_max}]"
        )


class PenaltyOutOfRangeError(ValidationError):
    """Base penalty lies outside the crime's legal range."""

    code: str = "PENALTY_OUT_OF_RANGE"

    def __init__(self, base_penalty: Any, penalty_min: Any, penalty_max: Any):
        self.base_penalty = str(base_penalty)
        self.penalty_min = str(penalty_min)
        self.penalty_max = str(penalty_max)
        super().__init__(
            f"Base penalty {base_penalty} outside legal range "
            f"[{penalty_min}, {penalty_max}]"
        )


class DisallowedValueError(ValidationError):
    """Value is not a member of the field's enumerated set."""

    code: str = "DISALLOWED_VALUE"

    def __init__(self, field_name: str, value: Any, allowed: tuple[Any, ...]):
        self.field_name = field_name
        self.value = str(value)
        self.allowed = tuple(str(a) for a in allowed)
        super().__init__(
            f"{field_name}={value!s} not allowed; expected one of "
            f"{', '.join(self.allowed)}"
        )


class MissingFieldError(ValidationError):
    """A field required by the selected branch was not supplied."""

    code: str = "MISSING_FIELD"

    def __init__(self, field_name: str, context: str):
        self.field_name = field_name
        self.context = context
        super().__init__(f"{field_name} is required for {context}")


# Format exceptions


class FormatError(JurisKernelError):
    """Base exception for unparseable raw input strings."""

    code: str = "FORMAT_ERROR"

    def __init__(self, raw_value: str, expected: str):
        self.raw_value = raw_value
        self.expected = expected
        super().__init__(f"Cannot parse {raw_value!r}: expected {expected}")


class AmountFormatError(FormatError):
    """Monetary string is not in pt-BR format (1.234,56)."""

    code: str = "AMOUNT_FORMAT_ERROR"


class NumberFormatError(FormatError):
    """Numeric string (count, years) cannot be parsed."""

    code: str = "NUMBER_FORMAT_ERROR"


class DateFormatError(FormatError):
    """Date string is neither ISO nor pt-BR formatted."""

    code: str = "DATE_FORMAT_ERROR"


# Catalog exceptions


class CatalogError(JurisKernelError):
    """Base exception for reference-catalog lookups."""

    code: str = "CATALOG_ERROR"


class CrimeNotFoundError(CatalogError):
    """No crime with the given id exists in the active catalog."""

    code: str = "CRIME_NOT_FOUND"

    def __init__(self, crime_id: str):
        self.crime_id = crime_id
        super().__init__(f"Crime not found: {crime_id}")
