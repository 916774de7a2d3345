"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select

from phrasemerge.adapters.sqlalchemy.mappings import phrase_table, record_to_row, row_to_record

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.orm import Session

    from phrasemerge.domain.model import PhraseRecord

log = logging.getLogger(__name__)


class SqlAlchemyPhraseRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_all(self) -> list[PhraseRecord]:
        stmt = select(phrase_table).order_by(phrase_table.c.position, phrase_table.c.row_id)
        return [row_to_record(row) for row in self.session.execute(stmt)]

    def get(self, record_id: str) -> PhraseRecord | None:
        stmt = (
            select(phrase_table)
            .where(phrase_table.c.id == record_id)
            .order_by(phrase_table.c.position)
            .limit(1)
        )
        row = self.session.execute(stmt).first()
        return row_to_record(row) if row is not None else None

    def replace_all(self, records: Sequence[PhraseRecord]) -> None:
        """Swap the stored collection for ``records`` within the current transaction."""

        self.session.execute(delete(phrase_table))
        rows = [record_to_row(record, position=index) for index, record in enumerate(records)]
        if rows:
            self.session.execute(insert(phrase_table), rows)
        log.debug("Staged %s phrase rows for replacement", len(rows))
