"""
Application Layer - Use Cases and Orchestration

Responsibility:
    Coordinates the flow of data between API and Domain layers.
    Dispatches signup notifications in-process or through Celery.

Contains:
    - Commands (CQRS write operations: submit, delete)
    - Queries (CQRS read operations: list)
    - Application services (admin access gate, notification dispatch)
    - Ports (notifier interface)
    - Celery tasks (optional out-of-process notifications)

Does NOT contain:
    - Domain business rules (belongs to Domain layer)
    - HTTP handling (belongs to API layer)
    - Infrastructure details (belongs to Infrastructure layer)
"""
