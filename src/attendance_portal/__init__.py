"""Attendance Portal package.

Organized by feature modules (attendance, users, feedback) with a thin Flask
controller layer over service/repository layers.
"""
