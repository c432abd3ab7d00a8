"""Record identity and record values held by the store."""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

DEFAULT_ZONE_NAME = "_defaultZone"


@dataclass(frozen=True, slots=True)
class RecordID:
    """Identity of a record.

    Equality and hashing cover the record name and zone. The record name is
    the correlation key for per-item callbacks and partial-failure payloads.
    """

    record_name: str
    zone_name: str = DEFAULT_ZONE_NAME

    def __str__(self) -> str:
        return self.record_name


@dataclass
class Record:
    """A typed bag of optional fields keyed by a RecordID.

    Records are mutable like the service's own record objects; the store
    keeps whatever instance was last saved under an ID.
    """

    record_id: RecordID
    record_type: str
    fields: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def named(cls, record_name: str, record_type: str, **fields: Any) -> Record:
        """Build a record in the default zone from a bare name."""
        return cls(RecordID(record_name), record_type, dict(fields))

    @property
    def record_name(self) -> str:
        return self.record_id.record_name

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.fields[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.fields[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self.fields

    def keys(self) -> list[str]:
        return list(self.fields)

    def project(self, keys: Iterable[str]) -> Record:
        """Return a copy carrying only the requested keys.

        Keys the record does not have are skipped. The receiver is untouched,
        so the stored record keeps every field.
        """
        wanted = set(keys)
        kept = {k: copy.deepcopy(v) for k, v in self.fields.items() if k in wanted}
        return Record(self.record_id, self.record_type, kept)

    def copy(self) -> Record:
        return Record(self.record_id, self.record_type, copy.deepcopy(self.fields))

    def to_dict(self) -> dict[str, Any]:
        return {
            "record_name": self.record_id.record_name,
            "zone_name": self.record_id.zone_name,
            "record_type": self.record_type,
            "fields": dict(self.fields),
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Record:
        """Inverse of to_dict(); zone_name and fields are optional."""
        record_id = RecordID(data["record_name"], data.get("zone_name", DEFAULT_ZONE_NAME))
        return cls(record_id, data["record_type"], dict(data.get("fields", {})))
