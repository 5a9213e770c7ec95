from app.db.models.colony import Colony
from app.db.models.room import Room
from app.db.models.rental import Rental
from app.db.models.rental_history import RentalHistory

__all__ = ["Colony", "Room", "Rental", "RentalHistory"]
