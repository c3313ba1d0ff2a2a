"""shelfctl: books behind a typed-result repository/service stack."""

__version__ = "0.1.0"
