"""Time-value-of-money engine behind the loan, savings and investment calculators."""

__version__ = "0.3.0"
