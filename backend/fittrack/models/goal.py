from sqlalchemy import Column, DateTime, Integer, String
from fittrack.db import Base, new_id


class GoalRow(Base):
    __tablename__ = "goals"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String, nullable=False, index=True)

    type = Column(String, nullable=False)  # daily_calories, daily_workouts, active_time...
    target = Column(Integer, nullable=False)
    current = Column(Integer, nullable=False, default=0, server_default="0")

    # Creation time
    date = Column(DateTime(timezone=True), nullable=False)
