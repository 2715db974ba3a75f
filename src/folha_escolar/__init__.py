"""Folha escolar: monthly staff attendance/overtime sheets for municipal schools.

This package is organized by feature modules (employees, folhas, reports, ...)
with a thin Flask controller layer and service/repository layers.
"""

__version__ = "1.0.0"
