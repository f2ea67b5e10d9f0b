"""Payroll Hours package.

Computes hours worked and payslips per (employee, pay period) from raw
attendance records. Organized by feature modules (attendance, payroll)
with thin Flask controllers over service/repository layers.
"""
