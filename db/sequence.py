"""
db/sequence.py
--------------
Surrogate key allocation backed by the store's per-table sequences.
"""

import psycopg2

from utils.logger import get_logger

logger = get_logger(__name__)


class SequenceAllocator:
    """
    Hands out the next value of a named database sequence.

    The allocator runs on the caller's cursor so the id is drawn inside the
    same transaction as the INSERT that uses it. A failing sequence query
    propagates before any row is written.
    """

    next_value_sql = "SELECT nextval(%s);"

    def next(self, cur, sequence: str) -> int:
        """
        Draw the next id from ``sequence``.

        Args:
            cur: An open cursor (usually from ``db.connection.transaction()``).
            sequence: Sequence name, e.g. ``"seq_villes"``.

        Returns:
            The allocated integer id.
        """
        cur.execute(self.next_value_sql, (sequence,))
        row = cur.fetchone()
        if row is None or row[0] is None:
            raise psycopg2.DataError(f"Sequence {sequence} returned no value")
        value = int(row[0])
        logger.debug(f"Allocated id {value} from {sequence}")
        return value
