# schoolhub/models/user.py
import uuid
from sqlalchemy import Column, String, ForeignKey, DateTime, Uuid, func, text
from sqlalchemy.orm import relationship

from schoolhub.db.base_class import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    school_id = Column(Uuid, ForeignKey("schools.id", ondelete="CASCADE"), nullable=False, index=True)
    email = Column(String, unique=True, nullable=False)
    full_name = Column(String, nullable=True)
    # bcrypt hash; NULL until the account sets a password, which blocks login
    password_hash = Column(String, nullable=True)
    role = Column(String, nullable=False, index=True)  # admin|teacher|student|parent
    status = Column(String, nullable=False, server_default=text("'active'"))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    school = relationship("School")
