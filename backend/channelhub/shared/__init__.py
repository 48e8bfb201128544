"""
Shared Module

Contains the domain code behind the API:
- Models: SQLAlchemy ORM models
- Repositories: Data access layer
- Services: Business logic layer
- Schemas: Pydantic request/response models
- Core: Logging, exceptions
- Adapters: External service integrations

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions
    ├── db/             ← Database handle
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── services/       ← Business logic
    ├── schemas/        ← Pydantic schemas
    ├── adapters/       ← External services (media store)
    ├── migrations/     ← Alembic migrations
    └── utils/          ← Security, validators

Usage:
======
    from channelhub.shared.models import User, Subscription
    from channelhub.shared.repositories import UserRepository
    from channelhub.shared.services import AuthService
    from channelhub.shared.schemas import UserResponse, AuthResponse
    from channelhub.shared.core import logger, ChannelHubException
"""
