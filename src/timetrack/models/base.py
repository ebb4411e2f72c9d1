from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return current UTC time as naive datetime (for PostgreSQL TIMESTAMP).

    Database columns use TIMESTAMP WITHOUT TIME ZONE, so we strip tzinfo.
    All times are stored in UTC by convention.
    """
    return datetime.now(UTC).replace(tzinfo=None)


def persisted_id(entity: object) -> int:
    """Primary key of a row that has been loaded or flushed.

    Raises ValueError for an entity the database has not assigned an id yet.
    """
    entity_id = getattr(entity, "id", None)
    if entity_id is None:
        raise ValueError(f"{type(entity).__name__} has no primary key yet")
    return entity_id
