from sqlalchemy import Column, Integer, String, DateTime, JSON
from datetime import datetime
from phishcheck.database import Base

class StateSlot(Base):
    """One persisted piece of detector state: weights, allowList or denyList"""
    __tablename__ = "state_slots"
    
    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(64), unique=True, index=True, nullable=False)
    value = Column(JSON)
    
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
