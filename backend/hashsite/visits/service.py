"""Visit counter: read-modify-write on row 1, no locking (concurrent hits may lose an update)."""

from sqlalchemy.ext.asyncio import AsyncSession

from hashsite.visits.models import COUNTER_ID, Visit


async def increment_visits(session: AsyncSession) -> int:
    """Add one visit, creating the row with count 1 if absent. Caller must commit."""
    row = await session.get(Visit, COUNTER_ID)
    if row:
        row.count += 1
    else:
        row = Visit(id=COUNTER_ID, count=1)
        session.add(row)
    await session.flush()
    return row.count


async def get_visits(session: AsyncSession) -> int:
    """Return the current count, or 0 when no row exists."""
    row = await session.get(Visit, COUNTER_ID)
    return row.count if row else 0
