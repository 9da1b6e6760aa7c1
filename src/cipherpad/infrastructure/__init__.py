"""Infrastructure layer — database, migrations, repositories, store.

This layer depends on stdlib and third-party libs (SQLAlchemy, Alembic).
It may use domain value models but must never import from services,
commands, or output. The service layer drives it.
"""
