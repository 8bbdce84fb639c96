"""
Internal DTOs

DTOs for communication between the API and service layers.
These are not exposed to external APIs as-is.
"""
