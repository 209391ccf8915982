"""Infrastructure helpers such as Unit of Work implementations."""

from .unit_of_work import InMemoryUnitOfWork, SqlAlchemyUnitOfWork, UnitOfWork

__all__ = ["UnitOfWork", "SqlAlchemyUnitOfWork", "InMemoryUnitOfWork"]
