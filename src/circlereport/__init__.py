"""circlereport - Circle-wise reports of municipal waste complaints."""

__version__ = '0.3.0'
