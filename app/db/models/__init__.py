from app.db.models.user import User
from app.db.models.item import Item
from app.db.models.location import Location
from app.db.models.item_location import ItemLocation

__all__ = ["User", "Item", "Location", "ItemLocation"]
