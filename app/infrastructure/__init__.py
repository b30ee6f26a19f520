"""
Infrastructure layer for the SponsiWise sponsorship platform.

This layer contains the implementation details for external systems integration:
- Database (SQLAlchemy)
- Authentication (JWT bearer tokens)
- Durable job queue and workers
- Email delivery

The infrastructure layer implements interfaces defined in the domain layer,
following the Dependency Inversion Principle of Clean Architecture.
"""
