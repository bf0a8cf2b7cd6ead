"""Small helpers shared across :mod:`cnb_rates`."""
