"""
Data-transfer types exchanged between services.

Holds trade signal value objects and their JSON wire format.
"""
