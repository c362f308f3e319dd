# ebe/models/user.py
from sqlalchemy import Column, String, DateTime, func
from ebe.db.base_class import Base


class User(Base):
    """
    Reader account. Owned by the auth service; this service only reads the
    public display fields.
    """
    __tablename__ = "users"

    id = Column(String, primary_key=True)
    username = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=True)
    avatar = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username})>"
