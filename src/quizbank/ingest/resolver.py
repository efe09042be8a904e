"""
Lookup-or-create resolution of the normalized label tables.
"""

import logging
import random
import re
import time

from ..database.models import Category

logger = logging.getLogger(__name__)

# "Entertainment: Video Games (#15)" or "Science (17)"
CATEGORY_ID_PATTERN = re.compile(r'\((?:#)?(\d+)\)$')


def parse_category_id(name: str) -> int:
    """Return the upstream id encoded at the end of a category label, or 0."""
    match = CATEGORY_ID_PATTERN.search(name.strip())
    return int(match.group(1)) if match else 0


def make_sentinel_id() -> int:
    """
    Build a negative placeholder for ``Category.opentdb_id``.

    Milliseconds since the epoch scaled by 1000 plus a random suffix, so
    ids generated within the same millisecond differ in the low digits.
    """
    return -(int(time.time() * 1000) * 1000 + random.randint(0, 999))


class NormalizationResolver:
    """
    Maps free-text labels onto row ids, creating rows on first sight.

    Works inside the caller's session; new rows are flushed, not committed.
    """

    def __init__(self, session):
        self.session = session

    def resolve(self, label: str, model) -> int:
        """Resolve a ``QuestionType`` or ``Difficulty`` label to its id."""
        column = getattr(model, model.label_field)
        row = self.session.query(model).filter(column == label).first()
        if row:
            return row.id

        row = model(**{model.label_field: label})
        self.session.add(row)
        self.session.flush()
        logger.info(f"Created {model.__tablename__} entry '{label}'")
        return row.id

    def resolve_category(self, name: str, external_id: int = 0) -> int:
        row = self.session.query(Category).filter_by(name=name).first()
        if row:
            return row.id

        has_external_id = isinstance(external_id, int) and external_id > 0

        if has_external_id:
            row = self.session.query(Category).filter_by(opentdb_id=external_id).first()
            if row:
                logger.info(f"Renaming category {external_id} from '{row.name}' to '{name}'")
                row.name = name
                self.session.flush()
                return row.id

        opentdb_id = external_id if has_external_id else self._unused_sentinel()
        row = Category(name=name, opentdb_id=opentdb_id)
        self.session.add(row)
        self.session.flush()
        logger.info(f"Created category '{name}' (opentdb_id={opentdb_id})")
        return row.id

    def _unused_sentinel(self) -> int:
        while True:
            candidate = make_sentinel_id()
            taken = self.session.query(Category.id).filter_by(opentdb_id=candidate).first()
            if not taken:
                return candidate
            logger.debug(f"Sentinel {candidate} already in use, drawing another")
