from sqlalchemy.orm import Session
from typing import List, Optional
from fastapi import HTTPException, status, Depends
import logging

from apps.vendors.models import Vendor
from apps.vendors.schemas import VendorCreate, VendorUpdate
from apps.equipment.services import to_columns
from core.database import get_db

logger = logging.getLogger(__name__)


class VendorService:
    def __init__(self, db: Session):
        self.db = db

    def get_vendor_or_404(self, vendor_id: str) -> Vendor:
        db_vendor = self.db.query(Vendor).filter(Vendor.id == vendor_id).first()
        if not db_vendor:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Vendor not found"
            )
        return db_vendor

    def get_vendors(self, search: Optional[str] = None) -> List[Vendor]:
        query = self.db.query(Vendor)
        if search:
            query = query.filter(Vendor.company_name.ilike(f"%{search}%"))
        return query.order_by(Vendor.company_name).all()

    def create_vendor(self, vendor: VendorCreate) -> Vendor:
        db_vendor = Vendor(**to_columns(vendor.model_dump(), ("machines",)))
        self.db.add(db_vendor)
        self.db.commit()
        self.db.refresh(db_vendor)

        logger.info(f"Created vendor: {db_vendor.company_name} (ID: {db_vendor.id})")
        return db_vendor

    def update_vendor(self, vendor_id: str, vendor_update: VendorUpdate) -> Vendor:
        db_vendor = self.get_vendor_or_404(vendor_id)
        for field, value in to_columns(vendor_update.model_dump(exclude_unset=True), ("machines",)).items():
            setattr(db_vendor, field, value)

        self.db.commit()
        self.db.refresh(db_vendor)

        logger.info(f"Updated vendor: {db_vendor.company_name}")
        return db_vendor

    def delete_vendor(self, vendor_id: str) -> bool:
        db_vendor = self.get_vendor_or_404(vendor_id)
        self.db.delete(db_vendor)
        self.db.commit()

        logger.info(f"Deleted vendor: {db_vendor.company_name}")
        return True


def get_vendor_service(db: Session = Depends(get_db)) -> VendorService:
    return VendorService(db)
