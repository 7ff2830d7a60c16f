"""Employee Management System package.

Organized by feature modules (accounts, employees, attendance, leaves) with a
thin Flask controller layer over service/repository layers.
"""
