"""Clinic Workforce package.

This package is organized by feature modules (directory, schedule_blocks,
attendance, leave, payroll) with a thin Flask controller layer on top of
service/repository layers.
"""
