"""Scheduled entry points for running the analysis queue outside the API."""
