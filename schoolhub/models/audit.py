# schoolhub/models/audit.py
import uuid
from sqlalchemy import Column, String, Text, DateTime, Uuid, JSON, func
from schoolhub.db.base_class import Base

class AuditLog(Base):
    __tablename__ = "audit_logs"

    id         = Column(Uuid, primary_key=True, default=uuid.uuid4)
    school_id  = Column(Uuid, index=True, nullable=True)
    user_id    = Column(Uuid, index=True, nullable=True)  # actor
    action     = Column(String, nullable=False)
    payload    = Column(JSON, nullable=True)
    ip         = Column(String, nullable=True)
    user_agent = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)
