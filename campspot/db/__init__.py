"""Schema metadata: declarative Base shared by models, Alembic and test fixtures."""
