from sqlalchemy import Column, Integer, String, Float
from database import Base
from models.audit_mixin import TimestampMixin


class Ingredient(Base, TimestampMixin):
    __tablename__ = "ingredient_items"

    id = Column(Integer, primary_key=True, index=True)
    # Unique case-insensitively; enforced by the repository, not the schema
    name = Column(String, nullable=False, index=True)
    required_amount = Column(Float, nullable=False, default=0.0) # "full stock" reference quantity
    unit = Column(String, nullable=False) # e.g., "liters", "kg"
