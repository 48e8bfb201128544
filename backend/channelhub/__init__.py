"""
ChannelHub Backend

Channel accounts, sessions and the subscription graph.

Package Structure:
==================
    channelhub/
    ├── api/        ← FastAPI application
    ├── shared/     ← Shared code (models, services, etc.)
    └── config/     ← Configuration

Running the Application:
========================
    # API Server
    uvicorn channelhub.api.main:app --reload

    # Migrations
    alembic upgrade head
"""
