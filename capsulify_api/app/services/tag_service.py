"""
Business logic for tags.

Tags live in their own collection and are referenced by id from
combinations once a combination has been updated.  The only operation
needed by the API is resolving human-readable names to those ids.
"""

import logging
from typing import Any, List

from bson import ObjectId

from capsulify_api.app.core.db import Database, run
from capsulify_api.app.core.errors import ValidationError


def _distinct_names(names: Any) -> List[str]:
    """Trim names and drop repeats, keeping first-seen order.

    A missing value yields an empty list.  Anything else that is not a
    list of strings cannot name tags and is rejected.
    """
    if names is None:
        return []
    if not isinstance(names, list):
        raise ValidationError("One or more invalid tags")
    seen: List[str] = []
    for name in names:
        if not isinstance(name, str):
            raise ValidationError("One or more invalid tags")
        name = name.strip()
        if name not in seen:
            seen.append(name)
    return seen


class TagService:
    """Resolves tag names against the ``tags`` collection."""

    def __init__(self, database: Database) -> None:
        self.database = database

    async def resolve(self, names: Any) -> List[ObjectId]:
        """Return the ids of the named tags in the order they were given.

        Raises ``ValidationError`` without naming the culprit if any
        distinct name has no matching tag.
        """
        requested = _distinct_names(names)
        if not requested:
            return []

        def _fetch() -> List[dict]:
            return list(self.database.tags.find({"name": {"$in": requested}}, {"name": 1}))

        docs = await run(_fetch)
        ids_by_name = {}
        for doc in docs:
            ids_by_name.setdefault(doc["name"], doc["_id"])
        if len(ids_by_name) != len(requested):
            logging.getLogger(__name__).info(
                "Rejected tags: %d of %d names resolved", len(ids_by_name), len(requested)
            )
            raise ValidationError("One or more invalid tags")
        return [ids_by_name[name] for name in requested]
