from decimal import Decimal
from sqlalchemy import Integer, String, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from employee_tracker.db.database import Base

class Role(Base):
    __tablename__ = "role"
    # sqlite: never reuse ids
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(30), nullable=False, unique=True)
    salary: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    department_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("department.id", ondelete="CASCADE"), nullable=False, index=True
    )
