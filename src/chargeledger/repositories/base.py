"""Base repository class."""

import aiosqlite


class BaseRepository:
    """
    Base class for all repositories.

    Repositories never commit: they run on the connection of the enclosing
    Database.transaction() scope and let errors propagate so the scope
    rolls back.
    """

    def __init__(self, connection: aiosqlite.Connection):
        self.conn = connection

    async def _execute(self, query: str, params: tuple = ()) -> aiosqlite.Cursor:
        """Execute a query and return the cursor."""
        return await self.conn.execute(query, params)

    async def _fetchone(self, query: str, params: tuple = ()) -> aiosqlite.Row | None:
        """Execute query and fetch one row."""
        cursor = await self.conn.execute(query, params)
        return await cursor.fetchone()

    async def _fetchall(self, query: str, params: tuple = ()) -> list[aiosqlite.Row]:
        """Execute query and fetch all rows."""
        cursor = await self.conn.execute(query, params)
        return await cursor.fetchall()
