from sqlalchemy import JSON, Column, Date, Integer
from bigjohn.db.database import Base


class DailyUserCountEntity(Base):
    __tablename__ = "daily_user_counts"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # one bucket per UTC day
    date = Column(Date, unique=True, nullable=False, index=True)

    userCount = Column(Integer, nullable=False, default=0)

    # distinct user ids seen that day, kept sorted
    users = Column(JSON, nullable=False, default=list)
