"""Timesheet Admin package.

This package is organized by feature modules (users, charge codes, settings,
timesheet, ...) with a thin Flask controller layer on top of service and
repository layers.
"""
