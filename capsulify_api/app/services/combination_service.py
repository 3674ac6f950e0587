"""
Business logic for outfit combinations.

``CombinationService`` turns search parameters into MongoDB filters and
performs create/read/update/delete against the ``combos`` collection.
Writes are validated before the store is touched: a missing required
field or an unknown tag raises ``ValidationError`` and nothing is
written.  Each operation is a single-document command; no transactions
are used, so concurrent updates of the same combination are
last-write-wins.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from capsulify_api.app.core.db import Database, parse_object_id, run, serialize_document
from capsulify_api.app.core.errors import NotFoundError, ValidationError
from capsulify_api.app.services.tag_service import TagService

CREATE_REQUIRED_FIELDS = ("comboName", "top", "bottom", "shoes", "bag", "tags", "layer")
UPDATE_REQUIRED_FIELDS = ("comboName", "top", "bottom", "shoes", "bag", "layer")

# Garment slots that may be constrained through a wardrobe query.
WARDROBE_CATEGORIES = frozenset({"bottom", "top", "dress", "shoes", "bag", "layer"})

LIST_PROJECTION = {
    "comboName": 1,
    "top": 1,
    "bottom": 1,
    "shoes": 1,
    "bag": 1,
    "dress": 1,
    "tags": 1,
}


def _split_csv(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _missing_fields(payload: Dict[str, Any], fields) -> List[str]:
    return [field for field in fields if not payload.get(field)]


def _normalize_tags(tags: Any) -> List[str]:
    if not isinstance(tags, list):
        return []
    return [str(tag).strip() for tag in tags]


class CombinationService:
    """Repository for the ``combos`` collection."""

    def __init__(self, database: Database, tag_service: Optional[TagService] = None) -> None:
        self.database = database
        self.tag_service = tag_service or TagService(database)

    @staticmethod
    def build_filter(
        tags: Optional[str] = None,
        combos: Optional[str] = None,
        wardrobe: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Build a MongoDB filter from search parameters.

        - ``tags``: comma-separated tag strings; any of them must be present.
        - ``combos``: text matched as a case-insensitive substring of
          ``comboName``.  Regex metacharacters are matched literally.
        - ``wardrobe``: comma-separated ``category:item`` pairs, each an
          exact match on that garment slot.  Unknown categories and pairs
          without an item are ignored.

        All constraints are combined with AND.  No parameters yields ``{}``,
        which matches every document.
        """
        criteria: Dict[str, Any] = {}

        if tags:
            tag_names = _split_csv(tags)
            if tag_names:
                criteria["tags"] = {"$in": tag_names}

        if combos:
            criteria["comboName"] = {"$regex": re.escape(combos), "$options": "i"}

        if wardrobe:
            for pair in _split_csv(wardrobe):
                category, _, item = pair.partition(":")
                category = category.strip().lower()
                item = item.strip()
                if category in WARDROBE_CATEGORIES and item:
                    criteria[category] = item

        return criteria

    async def list_combinations(self, criteria: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Return every combination matching ``criteria``, projected for listing."""
        logger = logging.getLogger(__name__)
        logger.debug("Constructed criteria: %s", criteria)

        def _fetch() -> List[dict]:
            return list(self.database.combos.find(criteria or {}, LIST_PROJECTION))

        combinations = await run(_fetch)
        logger.debug("Combinations found: %d", len(combinations))
        return [serialize_document(doc) for doc in combinations]

    async def get_combination(self, combo_id: str) -> Dict[str, Any]:
        """Retrieve a combination by id.

        Raises ``ValidationError`` for a malformed id and ``NotFoundError``
        when no document has it.
        """
        object_id = parse_object_id(combo_id)
        combination = await run(self.database.combos.find_one, {"_id": object_id})
        if combination is None:
            raise NotFoundError("Sorry, combination not found")
        return serialize_document(combination)

    async def create_combination(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a new combination and return it with its assigned id.

        Tags are stored as given (trimmed, order kept); a non-list value
        is stored as an empty list.
        """
        if _missing_fields(payload, CREATE_REQUIRED_FIELDS):
            raise ValidationError(
                "All fields (comboName, top, bottom, shoes, bag, tags, layer) are required."
            )

        document: Dict[str, Any] = {
            "comboName": payload["comboName"],
            "top": payload["top"],
            "bottom": payload["bottom"],
            "shoes": payload["shoes"],
            "bag": payload["bag"],
            "tags": _normalize_tags(payload["tags"]),
            "layer": payload["layer"],
        }
        if payload.get("dress"):
            document["dress"] = payload["dress"]

        result = await run(self.database.combos.insert_one, document)
        logging.getLogger(__name__).info(
            "Created combination %s (%s)", result.inserted_id, document["comboName"]
        )
        return serialize_document({**document, "_id": result.inserted_id})

    async def update_combination(self, combo_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Replace the fields of the combination at ``combo_id``.

        The body's ``comboName`` must name that same document; a name
        that is unknown or belongs to another combination raises
        ``NotFoundError``.  Tags are resolved to tag ids and any unknown
        name raises ``ValidationError``.  In both cases nothing is written.
        An update that changes nothing also raises ``NotFoundError``.
        """
        missing = _missing_fields(payload, UPDATE_REQUIRED_FIELDS)
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        object_id = parse_object_id(combo_id)

        existing = await run(
            self.database.combos.find_one,
            {"_id": object_id, "comboName": payload["comboName"]},
        )
        if existing is None:
            raise NotFoundError("Combo not found")

        tag_ids = await self.tag_service.resolve(payload.get("tags"))

        updated: Dict[str, Any] = {
            "comboName": payload["comboName"],
            "top": payload["top"],
            "bottom": payload["bottom"],
            "shoes": payload["shoes"],
            "bag": payload["bag"],
            "tags": tag_ids,
            "layer": payload["layer"],
        }
        if payload.get("dress"):
            updated["dress"] = payload["dress"]

        result = await run(self.database.combos.update_one, {"_id": object_id}, {"$set": updated})
        if result.matched_count == 0:
            raise NotFoundError("Combination not found")
        if result.modified_count == 0:
            raise NotFoundError("No changes made to combination")

        logging.getLogger(__name__).info("Updated combination %s", object_id)
        return serialize_document({**updated, "_id": object_id})

    async def delete_combination(self, combo_id: str) -> None:
        """Physically remove a combination.

        Raises ``NotFoundError`` if no document was deleted.
        """
        object_id = parse_object_id(combo_id)
        result = await run(self.database.combos.delete_one, {"_id": object_id})
        if result.deleted_count == 0:
            raise NotFoundError("Combination not found")
        logging.getLogger(__name__).info("Deleted combination %s", object_id)
