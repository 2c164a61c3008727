"""Time clock package.

Organized by feature modules (events, timesheet, payroll, users, ...) with a thin
Flask controller layer over service/repository layers. The daily timesheet engine
in ``timesheet`` is pure and never touches the database.
"""
