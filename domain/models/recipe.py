"""
Recipe finder models.
"""

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Column,
    DateTime,
    Integer,
    String,
    Text,
    Enum as SQLEnum,
)

from domain.models.database import Base, utcnow
from domain.enums import Difficulty


class Recipe(Base):
    """Recipe with its ingredient names and ordered instructions"""

    __tablename__ = "recipe"

    recipe_id = Column(String(100), primary_key=True)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    image = Column(String(500))
    cooking_time = Column(Integer, nullable=False)
    difficulty = Column(SQLEnum(Difficulty), nullable=False, default=Difficulty.MEDIUM)
    ingredients = Column(JSON, nullable=False, default=list)
    instructions = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (CheckConstraint("cooking_time > 0", name="check_cooking_time"),)
