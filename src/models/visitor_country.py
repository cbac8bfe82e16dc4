from sqlalchemy import Column, Integer, String
from .base import Base


class VisitorCountryModel(Base):
    __tablename__ = "visitor_countries"

    country = Column(String, primary_key=True)
    count = Column(Integer, nullable=False, default=0)
