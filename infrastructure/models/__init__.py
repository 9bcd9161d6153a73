"""Infrastructure models package exports."""
from .base import Base, metadata
from .order import OrderModel
from .user import UserModel

__all__ = [
    "Base",
    "metadata",
    "OrderModel",
    "UserModel",
]
