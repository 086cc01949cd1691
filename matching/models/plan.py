from sqlalchemy import Column, Integer, String

from .base import Base


class Plan(Base):
    __tablename__ = "plans"

    id = Column(Integer, primary_key=True)
    key = Column(String(64), unique=True, nullable=False)  # free / pro / premium ...
    name = Column(String(255))
