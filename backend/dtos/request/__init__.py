"""
Request DTOs

DTOs for incoming API requests. Field rules (required, length, range) are
enforced here, at the API boundary.
"""
