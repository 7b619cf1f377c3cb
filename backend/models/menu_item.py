from sqlalchemy import Column, Integer, String, Text, Float, Boolean
from database import Base
from models.audit_mixin import TimestampMixin


class MenuItem(Base, TimestampMixin):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    price = Column(Float, nullable=False)
    category = Column(String, nullable=False) # e.g., "Coffee", "Pastry"
    instructions = Column(Text, nullable=False, default="")
    is_active = Column(Boolean, nullable=False, default=True) # False once archived
    in_stock = Column(Boolean, nullable=False, default=True)
