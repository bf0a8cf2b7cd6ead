"""Fetching and parsing of CNB exchange rate documents."""
