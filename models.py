"""
Project: Café Menu Service

Description:
Database model for the menu. A single table, menu_items, holds every item
shown on the storefront.
"""

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import CheckConstraint, func

db = SQLAlchemy()

DEFAULT_CATEGORY = "coffee"

# Shown as tabs on the storefront; the column accepts any tag
RECOMMENDED_CATEGORIES = (
    "icecoffee",
    "mexican",
    "freshdrinks",
    "milkshake",
    "syrup",
    "sweets",
    "hotdrinks",
    "coffee",
)


class MenuItem(db.Model):
    __tablename__ = "menu_items"
    __table_args__ = (
        CheckConstraint("price > 0", name="ck_menu_items_price_positive"),
        # ids are never reused, even after the newest row is deleted
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    title = db.Column(db.String(255), nullable=False)
    title_kurdish = db.Column(db.String(255), default="")
    description = db.Column(db.Text, default="")
    description_kurdish = db.Column(db.Text, default="")
    category = db.Column(db.String(50), nullable=False, default=DEFAULT_CATEGORY)
    price = db.Column(db.Integer, nullable=False)
    image_url = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=func.now())

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "titleKurdish": self.title_kurdish or "",
            "description": self.description or "",
            "descriptionKurdish": self.description_kurdish or "",
            "category": self.category,
            "price": self.price,
            "imageUrl": self.image_url,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<MenuItem {self.id} {self.title!r}>"
