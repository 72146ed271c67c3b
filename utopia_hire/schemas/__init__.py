"""
Schemas module - Request/Response schemas for API endpoints.

Tables live in utopia_hire.db.tables; schemas are the API contract
(what the client sends and receives).
"""
