"""
juris_services -- Orchestration over configuration and engines.

Services parse raw form input, build engine inputs from the active
configuration set, and log each completed calculation.
"""

from juris_services.calculator_service import CalculatorService

__all__ = ["CalculatorService"]
