"""
Service startup orchestration.

Creates working directories, configures logging and tracks uptime for
health reporting.
"""
