"""Role catalog reconciliation and default admin bootstrap for management.cattle.io."""

__version__ = "0.1.0"
