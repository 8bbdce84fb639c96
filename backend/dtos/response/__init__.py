"""
Response DTOs

DTOs for outgoing API responses, including fields derived at read time
that are never stored.
"""
