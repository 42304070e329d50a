"""Due-set selection for review sessions.

Selects the words whose next review date has arrived, keeping the
collection's own order so callers control presentation order.
"""

import logging
from collections.abc import Iterable
from datetime import datetime

from lingo.srs.records import WordRecord

logger = logging.getLogger(__name__)


def is_due(record: WordRecord, as_of: datetime) -> bool:
    """Return True if ``record`` is due at ``as_of``."""
    return record.next_review <= as_of


def words_due_for_review(
    collection: Iterable[WordRecord],
    as_of: datetime,
    limit: int | None = None,
) -> list[WordRecord]:
    """Return every record due at ``as_of``, in input order.

    Args:
        collection: All known word records.
        as_of: The moment to evaluate due dates against.
        limit: Optional cap on the number of records returned. The first
            ``limit`` due records are kept; None or a non-positive value
            means no cap.

    Returns:
        A new list; the input is not modified.
    """
    due = [record for record in collection if is_due(record, as_of)]
    if limit is not None and limit > 0:
        due = due[:limit]
    logger.debug("%d words due as of %s", len(due), as_of.isoformat())
    return due
