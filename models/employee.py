from sqlalchemy import Column, Integer, String

from database import Base


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(256), nullable=False)
    position = Column(String(256), nullable=False)
