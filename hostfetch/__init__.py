"""Collect system information on Linux hosts, one module per area of the system."""

__version__ = "0.1.0"