from sqlalchemy import Column, Integer, String
from fittrack.db import Base, new_id


class ExerciseRow(Base):
    __tablename__ = "exercises"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    calories_per_minute = Column(Integer, nullable=False)
    emoji = Column(String, nullable=False, server_default="")
