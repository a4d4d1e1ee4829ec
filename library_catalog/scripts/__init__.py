"""Operator scripts run with python -m."""
