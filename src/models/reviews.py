"""
Reviews SQLAlchemy model.

product_id and user_id are plain integers: whether a review must point at an
existing product or user is left to whoever administers the store.
"""

from sqlalchemy import Column, Integer, Text
from sqlalchemy.sql.schema import CheckConstraint

from src.db.postgres_bootstrap import Base


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, nullable=False, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    score = Column(Integer, CheckConstraint("score BETWEEN 1 AND 5", name="score_range"), nullable=False)
    content = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Review(id={self.id}, product_id={self.product_id}, user_id={self.user_id}, score={self.score})>"
