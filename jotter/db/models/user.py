from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from jotter.db.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    # subject (sub) из токена внешнего провайдера идентификации
    external_id = Column(String(255), unique=True, index=True, nullable=False)
    email = Column(String(255), nullable=False, default="")
    name = Column(String(255), nullable=False, default="")

    # Relationships
    owned_documents = relationship("Document", back_populates="owner", cascade="all, delete-orphan")
