from sqlalchemy.orm import Session
from typing import List, Optional
from fastapi import HTTPException, status, Depends
import logging

from apps.engineers.models import Engineer
from apps.engineers.schemas import EngineerCreate, EngineerUpdate
from core.database import get_db

logger = logging.getLogger(__name__)


class EngineerService:
    def __init__(self, db: Session):
        self.db = db

    def get_engineer_or_404(self, engineer_id: str) -> Engineer:
        db_engineer = self.db.query(Engineer).filter(Engineer.id == engineer_id).first()
        if not db_engineer:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Engineer not found"
            )
        return db_engineer

    def get_engineers(self, company_id: Optional[str] = None) -> List[Engineer]:
        query = self.db.query(Engineer)
        if company_id:
            query = query.filter(Engineer.company_id == company_id)
        return query.order_by(Engineer.name).all()

    def create_engineer(self, engineer: EngineerCreate) -> Engineer:
        db_engineer = Engineer(**engineer.model_dump())
        self.db.add(db_engineer)
        self.db.commit()
        self.db.refresh(db_engineer)

        logger.info(f"Created engineer: {db_engineer.name} (ID: {db_engineer.id})")
        return db_engineer

    def update_engineer(self, engineer_id: str, engineer_update: EngineerUpdate) -> Engineer:
        db_engineer = self.get_engineer_or_404(engineer_id)
        for field, value in engineer_update.model_dump(exclude_unset=True).items():
            setattr(db_engineer, field, value)

        self.db.commit()
        self.db.refresh(db_engineer)

        logger.info(f"Updated engineer: {db_engineer.name}")
        return db_engineer

    def delete_engineer(self, engineer_id: str) -> bool:
        db_engineer = self.get_engineer_or_404(engineer_id)
        self.db.delete(db_engineer)
        self.db.commit()

        logger.info(f"Deleted engineer: {db_engineer.name}")
        return True


def get_engineer_service(db: Session = Depends(get_db)) -> EngineerService:
    return EngineerService(db)
