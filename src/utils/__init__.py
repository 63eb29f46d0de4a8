"""
Generic utility functions shared across modules.

Includes time/clock abstractions and structured logging setup.
"""
