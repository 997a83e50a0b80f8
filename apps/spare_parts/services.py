from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import List, Optional, Tuple
from fastapi import HTTPException, status, Depends
from apps.spare_parts.models import SparePart
from apps.spare_parts.schemas import (
    SparePartCreate,
    SparePartUpdate,
    SparePartStockUpdate,
    LowStockAlert
)
from core.database import get_db
from core.errors import ValidationFailure
import logging

logger = logging.getLogger(__name__)

class SparePartService:
    def __init__(self, db: Session):
        self.db = db

    def get_spare_part(self, spare_part_id: str) -> Optional[SparePart]:
        """Get spare part by ID"""
        return self.db.query(SparePart).filter(SparePart.id == spare_part_id).first()

    def get_spare_part_or_404(self, spare_part_id: str) -> SparePart:
        db_spare_part = self.get_spare_part(spare_part_id)
        if not db_spare_part:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Spare part not found"
            )
        return db_spare_part

    def get_spare_parts(
        self,
        skip: int = 0,
        limit: int = 100,
        search: Optional[str] = None,
        supplier: Optional[str] = None,
        low_stock_only: bool = False
    ) -> Tuple[List[SparePart], int]:
        """Get spare parts with filtering and pagination"""
        query = self.db.query(SparePart)

        if search:
            query = query.filter(or_(
                SparePart.name.ilike(f"%{search}%"),
                SparePart.supplier.ilike(f"%{search}%")
            ))

        if supplier:
            query = query.filter(SparePart.supplier == supplier)

        if low_stock_only:
            query = query.filter(SparePart.quantity <= SparePart.min_quantity)

        total = query.count()
        spare_parts = query.order_by(SparePart.name).offset(skip).limit(limit).all()
        return spare_parts, total

    def get_compatible_parts(self, equipment_name: str) -> List[SparePart]:
        """Parts whose compatibility list mentions the equipment name, case-insensitively"""
        needle = equipment_name.strip().lower()
        return [
            part for part in self.db.query(SparePart).order_by(SparePart.name).all()
            if any(needle in (entry or "").lower() for entry in part.compatibility or [])
        ]

    def create_spare_part(self, spare_part: SparePartCreate) -> SparePart:
        db_spare_part = SparePart(**spare_part.model_dump())
        self.db.add(db_spare_part)
        self.db.commit()
        self.db.refresh(db_spare_part)

        logger.info(f"Created spare part: {db_spare_part.name} (ID: {db_spare_part.id})")
        return db_spare_part

    def update_spare_part(self, spare_part_id: str, spare_part_update: SparePartUpdate) -> SparePart:
        db_spare_part = self.get_spare_part_or_404(spare_part_id)

        for field, value in spare_part_update.model_dump(exclude_unset=True).items():
            setattr(db_spare_part, field, value)

        self.db.commit()
        self.db.refresh(db_spare_part)

        logger.info(f"Updated spare part: {db_spare_part.name} (ID: {db_spare_part.id})")
        return db_spare_part

    def delete_spare_part(self, spare_part_id: str) -> bool:
        db_spare_part = self.get_spare_part_or_404(spare_part_id)
        self.db.delete(db_spare_part)
        self.db.commit()

        logger.info(f"Deleted spare part: {db_spare_part.name} (ID: {spare_part_id})")
        return True

    def update_stock(self, spare_part_id: str, stock_update: SparePartStockUpdate) -> SparePart:
        """Adjust stock; it may not go below zero"""
        db_spare_part = self.get_spare_part_or_404(spare_part_id)

        current = db_spare_part.quantity or 0
        new_quantity = current + stock_update.quantity_change
        if new_quantity < 0:
            raise ValidationFailure(
                f"Insufficient stock. Current: {current}, "
                f"Requested reduction: {abs(stock_update.quantity_change)}",
                field="quantity_change"
            )

        db_spare_part.quantity = new_quantity
        self.db.commit()
        self.db.refresh(db_spare_part)

        logger.info(
            f"Updated stock for {db_spare_part.name}: "
            f"{stock_update.quantity_change} (Reason: {stock_update.reason})"
        )
        if new_quantity <= (db_spare_part.min_quantity or 0):
            logger.warning(f"{db_spare_part.name} is at or below its reorder level ({new_quantity} left)")
        return db_spare_part

    def get_low_stock_items(self) -> List[LowStockAlert]:
        """Parts whose stock is at or below the reorder threshold"""
        low_stock_items = self.db.query(SparePart).filter(
            SparePart.quantity <= SparePart.min_quantity
        ).order_by(SparePart.quantity).all()

        return [
            LowStockAlert(
                spare_part=item,
                current_stock=item.quantity or 0,
                minimum_level=item.min_quantity or 0,
                out_of_stock=(item.quantity or 0) == 0
            )
            for item in low_stock_items
        ]

# Dependency injection
def get_spare_part_service(db: Session = Depends(get_db)) -> SparePartService:
    return SparePartService(db)
