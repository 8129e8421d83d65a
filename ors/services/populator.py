from __future__ import annotations

from typing import Any, Mapping, Optional

from ors.store.descriptor import EntityDescriptor
from ors.utils.data_utility import convert, current_timestamp, get_long, get_string, get_timestamp


def populate_bean(descriptor: EntityDescriptor, fields: Mapping[str, Any]):
    """
    Build a working record of ``descriptor``'s model from raw field values.

    Blank or unparsable numbers become 0 and dates None, so a half-filled
    form can always be redisplayed.
    """

    values = {
        name: convert(kind, fields.get(name))
        for name, kind in descriptor.field_types.items()
    }
    return descriptor.new_record(**values)


def populate_dto(record, fields: Mapping[str, Any], identity: Optional[str], system_identity: str):
    """Merge audit metadata into ``record`` for the acting ``identity``."""

    if not identity:
        record.created_by = system_identity
        record.modified_by = system_identity
    else:
        record.modified_by = identity
        incoming = get_string(fields.get("created_by"))
        if incoming is None or incoming.lower() == "null":
            record.created_by = identity
        else:
            record.created_by = incoming

    now = current_timestamp()
    created = get_long(fields.get("created_datetime"))
    record.created_datetime = get_timestamp(created) or now
    record.modified_datetime = now
    return record
