"""
Declarative base shared by all database models
"""

from sqlalchemy import inspect
from sqlalchemy.orm import declarative_base

# Schemas used by the production warehouse; stripped on SQLite
ACCESS_SCHEMA = "powerbi"
DIMENSION_SCHEMA = "dim"

# Create the base class
Base = declarative_base()


class BaseModel(Base):
    """
    Base model class that provides common functionality
    for all database models
    """
    __abstract__ = True

    def __repr__(self) -> str:
        """
        String representation of the model
        """
        return f"<{self.__class__.__name__}(identity={inspect(self).identity})>"
