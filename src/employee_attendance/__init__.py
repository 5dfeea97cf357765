"""Employee Attendance package.

Feature modules (employees, holidays, attendance, ...) sit behind a thin Flask
controller layer with service/repository layers underneath.
"""
