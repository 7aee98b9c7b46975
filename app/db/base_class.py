from sqlalchemy.orm import declarative_base

# Declarative base shared by all models and by Alembic autogenerate
Base = declarative_base()
