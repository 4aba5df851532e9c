from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from employee_tracker.db.database import Base

class Department(Base):
    __tablename__ = "department"
    # sqlite: never reuse ids
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(30), nullable=False, unique=True)
