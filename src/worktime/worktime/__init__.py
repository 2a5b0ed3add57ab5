"""Worktime package.

Derives a worker's daily check-in, break and check-out history from a
stream of timestamped events (login, logout, manual corrections). Organized
by feature modules (tracking, reporting) over plain service/repository
layers.
"""
