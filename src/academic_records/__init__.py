"""Academic records package.

Organized by feature modules (attendance, grading, reports, leaves, ...)
with a thin Flask controller layer on top of service/repository layers.
"""
