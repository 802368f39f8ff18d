"""Repository for reservation lookups and consumption."""

from ..errors import ReservationNotFoundError
from ..models import Reservation
from .base import BaseRepository


class ReservationRepository(BaseRepository):
    """Reads and deletes reservations; creating them is left to reservation management."""

    async def delete(self, reservation_pk: int) -> None:
        """Consume a reservation. Raises ReservationNotFoundError if nothing was deleted."""
        cursor = await self._execute(
            "DELETE FROM reservation WHERE reservation_pk = ?", (reservation_pk,)
        )
        if cursor.rowcount != 1:
            raise ReservationNotFoundError(reservation_pk)

    async def get_by_id(self, reservation_pk: int) -> Reservation | None:
        row = await self._fetchone(
            "SELECT * FROM reservation WHERE reservation_pk = ?", (reservation_pk,)
        )
        if row:
            return Reservation(
                reservation_pk=row["reservation_pk"],
                id_tag=row["idTag"],
                charge_box_id=row["chargeBoxId"],
                start_datetime=row["startDatetime"],
                expiry_datetime=row["expiryDatetime"],
            )
        return None
