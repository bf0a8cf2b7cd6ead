"""Command line entry points for :mod:`cnb_rates`."""
