"""Command line interface for datacontracts."""
