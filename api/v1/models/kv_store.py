from sqlalchemy import Column, String, Text, TIMESTAMP
from sqlalchemy.sql import func
from api.db.database import Base


class KeyValue(Base):
    __tablename__ = "key_value"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)  # serialized blob, usually JSON
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
