from datetime import datetime, timezone

from sqlalchemy import (
    Column, DateTime, ForeignKey, Integer, String, Table, Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .db import Base


def utcnow():
    # naive UTC; SQLite drops tzinfo on read
    return datetime.now(timezone.utc).replace(tzinfo=None)


# Categories are shared labels, so recipes reference them many-to-many
recipe_categories = Table(
    "recipe_categories",
    Base.metadata,
    Column(
        "recipe_id", Integer,
        ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column(
        "category_id", Integer,
        ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True,
    ),
)


class Recipe(Base):
    __tablename__ = "recipes"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), index=True, nullable=False)
    image_url = Column(String(500), nullable=True)
    prep_time = Column(String(100), nullable=False, default="")
    cook_time = Column(String(100), nullable=False, default="")
    comments = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(
        DateTime, default=utcnow, onupdate=utcnow
    )

    instructions = relationship(
        "Instruction",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="Instruction.index",
    )
    ingredients = relationship(
        "Ingredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="Ingredient.name",
    )
    categories = relationship(
        "Category", secondary=recipe_categories, back_populates="recipes"
    )

    def __repr__(self):
        return f"<Recipe(id={self.id}, name={self.name!r})>"


class Instruction(Base):
    __tablename__ = "instructions"
    __table_args__ = (
        UniqueConstraint("recipe_id", "index", name="uq_instruction_index"),
    )
    id = Column(Integer, primary_key=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )
    index = Column(Integer, nullable=False)
    text = Column(Text, nullable=False)

    recipe = relationship("Recipe", back_populates="instructions")


class Ingredient(Base):
    __tablename__ = "ingredients"
    __table_args__ = (
        UniqueConstraint("recipe_id", "name", name="uq_ingredient_name"),
    )
    id = Column(Integer, primary_key=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(String(200), nullable=False)
    quantity = Column(String(200), nullable=True)

    recipe = relationship("Recipe", back_populates="ingredients")


class Category(Base):
    __tablename__ = "categories"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, index=True, nullable=False)

    recipes = relationship(
        "Recipe", secondary=recipe_categories, back_populates="categories"
    )
