"""Workforce payroll package.

Organized by feature modules (shifts, attendance, employees, payroll) with a
thin Flask controller layer on top of service/repository layers.
"""
