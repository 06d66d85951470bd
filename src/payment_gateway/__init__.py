"""Card payment gateway: validate, authorize with the acquiring bank, record."""

__version__ = "0.1.0"
