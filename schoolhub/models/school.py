# schoolhub/models/school.py
import uuid
from sqlalchemy import Column, String, DateTime, Uuid, func

from schoolhub.db.base_class import Base

# Tenant: every other table carries a school_id
class School(Base):
    __tablename__ = "schools"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    slug = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
