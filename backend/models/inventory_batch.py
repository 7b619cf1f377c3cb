from sqlalchemy import Column, Integer, Float, DateTime, Date
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import TimestampMixin
from utils.clock import today
from utils.stock_status import batch_freshness


class InventoryBatch(Base, TimestampMixin):
    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True, index=True)
    # Plain reference, no FK constraint: orphans are possible and handled by reconciliation
    ingredient_id = Column(Integer, nullable=False, index=True)
    initial_amount = Column(Float, nullable=False)
    current_amount = Column(Float, nullable=False)
    expiration_date = Column(Date, nullable=False)
    total_cost = Column(Float, nullable=False, default=0.0)
    finished_at = Column(DateTime(timezone=True), nullable=True) # set when a usage brings current_amount to 0

    ingredient = relationship(
        "Ingredient",
        primaryjoin="foreign(InventoryBatch.ingredient_id) == Ingredient.id",
        viewonly=True,
    )

    @property
    def freshness(self):
        return batch_freshness(self, today()).value
