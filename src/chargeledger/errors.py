"""Exceptions raised inside a transaction scope to force a rollback."""


class PersistenceError(Exception):
    """Base class for failures detected by the persistence layer itself."""


class ConnectorNotFoundError(PersistenceError):
    def __init__(self, charge_box_id: str, connector_id: int):
        super().__init__(f"Connector {charge_box_id}/{connector_id} is not known")
        self.charge_box_id = charge_box_id
        self.connector_id = connector_id


class TransactionNotFoundError(PersistenceError):
    def __init__(self, transaction_pk: int):
        super().__init__(f"Transaction {transaction_pk} is not known")
        self.transaction_pk = transaction_pk


class ReservationNotFoundError(PersistenceError):
    def __init__(self, reservation_pk: int):
        super().__init__(f"Reservation {reservation_pk} does not exist")
        self.reservation_pk = reservation_pk
