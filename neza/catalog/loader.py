"""Catalog loader — validates raw catalog data before it reaches the matcher."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from neza.exceptions import CatalogIntegrityError
from neza.schemas.catalog import FinancialEntity, ProductCatalog

logger = logging.getLogger(__name__)


def load_entity(data: dict[str, Any]) -> FinancialEntity:
    """Validate one entity with its products.

    Raises:
        CatalogIntegrityError: On NaN/negative numbers, contradictory ranges
            (min above max) or duplicate product ids within the entity.
    """
    try:
        entity = FinancialEntity.model_validate(data)
    except ValidationError as exc:
        entity_id = data.get("id", "<unknown>") if isinstance(data, dict) else "<unknown>"
        msg = f"Invalid catalog entry for entity {entity_id}: {exc.error_count()} error(s)"
        raise CatalogIntegrityError(msg) from exc

    product_ids = [p.id for p in entity.products]
    if len(product_ids) != len(set(product_ids)):
        msg = f"Duplicate product ids in entity {entity.id}"
        raise CatalogIntegrityError(msg)

    return entity


def load_catalog(raw_entities: Iterable[dict[str, Any]]) -> ProductCatalog:
    """Validate a full catalog; any bad entity rejects the whole catalog."""
    entities = [load_entity(raw) for raw in raw_entities]

    entity_ids = [e.id for e in entities]
    if len(entity_ids) != len(set(entity_ids)):
        msg = "Duplicate entity ids in catalog"
        raise CatalogIntegrityError(msg)

    catalog = ProductCatalog(entities=tuple(entities))
    logger.debug("Loaded catalog: %d entities, %d products", len(entities), catalog.product_count)
    return catalog
