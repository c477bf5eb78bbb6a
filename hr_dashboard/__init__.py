"""HR Dashboard — attendance and employee directory service over the HR API."""

__version__ = "1.0.0"
