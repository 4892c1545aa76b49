import hashlib
import uuid


def string_to_hash(value: str) -> str:
    """Derive a stable UUID-formatted id from an arbitrary string key."""
    digest = hashlib.sha256(value.encode("utf-8")).hexdigest()
    return str(uuid.UUID(hex=digest[:32]))


def mapping_key(source: str, country_code: str, source_id: str) -> str:
    return f"{source}_{country_code}_{source_id}"


def mapping_id(source: str, country_code: str, source_id: str) -> str:
    return string_to_hash(mapping_key(source, country_code, source_id))
