"""Timeflow package.

Attendance timekeeping and shift scheduling core, organized by feature modules
(timeclock, reports, scheduling) with REST repositories, SOLID service layers
and a thin Flask controller layer.
"""
