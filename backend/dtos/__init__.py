"""
Data Transfer Objects (DTOs) Layer

DTOs decouple the HTTP wire format from the Movie entity and its table, so
the three can evolve independently.

Structure:
- request/: DTOs for incoming create, update and patch requests
- response/: DTOs for outgoing movie and page responses
- internal/: DTOs passed from the API layer to the service layer
- mapper.py: pure conversions between DTOs and the entity
"""
