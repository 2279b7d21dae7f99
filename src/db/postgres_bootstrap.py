"""
Declarative base shared by the table models and the connection layer.
Kept in its own module to avoid circular imports when creating the tables.
"""

from sqlalchemy import MetaData
from sqlalchemy.orm.decl_api import declarative_base

# Named constraints so CHECK failures are recognisable in store errors
metadata = MetaData(naming_convention={"ck": "ck_%(table_name)s_%(constraint_name)s"})

Base = declarative_base(metadata=metadata)
