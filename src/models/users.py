"""
Users SQLAlchemy model.
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.sql.schema import CheckConstraint

from src.db.postgres_bootstrap import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False)
    email = Column(String(255), CheckConstraint("email LIKE '%@%.%'", name="email_format"), unique=True, nullable=False)
    password = Column(String(128), nullable=False)  # sha512 hex digest, never plaintext

    def __repr__(self):
        # password left out on purpose
        return f"<User(id={self.id}, username={self.username}, email={self.email})>"
