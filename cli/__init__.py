"""Command line entry points for teachnet."""
