"""
API Layer - FastAPI Presentation Layer

Responsibility:
    HTTP interface for the application. Handles requests, responses,
    origin and rate-limit guards. No business logic.

Contains:
    - FastAPI routers (submissions, admin)
    - Request/Response models (Pydantic)
    - Dependency injection setup
    - Middleware configuration (CORS, security headers, logging, rate limit)

Does NOT contain:
    - Business logic (belongs to Domain layer)
    - Orchestration (belongs to Application layer)
    - Storage operations (belongs to Infrastructure layer)
"""
