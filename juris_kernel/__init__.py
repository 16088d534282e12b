"""
Juris Kernel

Shared foundation for the legal-computation engines:
- Typed exceptions with machine-readable codes
- Structured JSON logging
- Injectable clock
- pt-BR form-string parsing
"""

__version__ = "0.1.0"
