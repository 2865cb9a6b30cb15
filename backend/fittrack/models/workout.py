from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func
from fittrack.db import Base, new_id


class WorkoutRow(Base):
    __tablename__ = "workouts"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String, nullable=False, index=True)

    exercise_type = Column(String, nullable=False)
    duration = Column(Integer, nullable=False)  # minutes
    calories = Column(Integer, nullable=False)
    intensity = Column(
        String(10),
        nullable=False,
        server_default="medium",  # low, medium, high
    )
    notes = Column(String, nullable=True)

    # When the workout happened (stored as UTC), not when it was logged
    date = Column(DateTime(timezone=True), nullable=False, index=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
