"""Resolve ``<token>.<base-host>`` subdomains to an entity's official website."""

__version__ = "0.3.0"
