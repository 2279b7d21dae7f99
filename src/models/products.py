"""
Products SQLAlchemy model.
"""

from sqlalchemy import Column, Float, Integer, String, Text
from sqlalchemy.sql.schema import CheckConstraint

from src.db.postgres_bootstrap import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), CheckConstraint("name <> ''", name="name_not_empty"), nullable=False, index=True)
    about = Column(Text, nullable=False, default="")
    price = Column(Float, CheckConstraint("price > 0", name="price_positive"), nullable=False)

    def __repr__(self):
        return f"<Product(id={self.id}, name={self.name}, about={self.about}, price={self.price})>"
