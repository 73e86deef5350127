"""Attendance Tracker package.

Organized by feature modules (attendance, reports, holidays, ...) with a thin
Flask controller layer over service/repository layers.
"""
