from sqlalchemy import Column, Integer, String, Float, Boolean, JSON
from sqlalchemy.ext.mutable import MutableDict

from .base import Base


class University(Base):
    __tablename__ = "universities"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    slug = Column(String, unique=True)
    country = Column(String)
    city = Column(String)
    climate = Column(String)
    campus_setting = Column(String)
    avg_tuition_per_year = Column(Float)
    cost_of_living_index = Column(Float)
    acceptance_rate = Column(Float)
    sat_average = Column(Float)
    enrollment = Column(Integer)
    international_student_percentage = Column(Float)
    graduation_rate = Column(Float)
    employment_rate = Column(Float)
    need_blind_admissions = Column(Boolean)
    degree_levels = Column(JSON)
    languages = Column(JSON)
    required_tests = Column(JSON)
    interests = Column(JSON)
    # Everything else, including keys from older imports (location_country, focus_areas, ...)
    attributes = Column(MutableDict.as_mutable(JSON), default=dict)
