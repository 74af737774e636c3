"""
Filter configuration for the conversation filter engine.
"""

from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Dict, Any, Optional, Union, Mapping

from .conversation import STATUS_ALL

DateLike = Union[date, datetime, str]

DATE_PRESET_TODAY = "today"
DATE_PRESET_YESTERDAY = "yesterday"
DATE_PRESET_7_DAYS = "7days"
DATE_PRESET_30_DAYS = "30days"
DATE_PRESET_90_DAYS = "90days"

# Preset -> number of days back from today where the window starts.
DATE_PRESET_DAYS = {
    DATE_PRESET_TODAY: 0,
    DATE_PRESET_7_DAYS: 7,
    DATE_PRESET_30_DAYS: 30,
    DATE_PRESET_90_DAYS: 90,
}

DATE_PRESET_LABELS = {
    DATE_PRESET_TODAY: "Hoy",
    DATE_PRESET_YESTERDAY: "Ayer",
    DATE_PRESET_7_DAYS: "Últimos 7 días",
    DATE_PRESET_30_DAYS: "Últimos 30 días",
    DATE_PRESET_90_DAYS: "Últimos 90 días",
}

# Keys used by the dashboard front-end, mapped to FilterSpec attributes.
_CAMEL_CASE_KEYS = {
    "datePreset": "date_preset",
    "startDate": "start_date",
    "endDate": "end_date",
    "status": "status",
    "product": "product",
    "client": "client",
    "searchText": "search_text",
}


@dataclass
class FilterSpec:
    """
    Set of optional filters applied to a conversation list.

    Empty strings and ``None`` mean "not filtering on this field".
    """
    date_preset: str = ""
    start_date: Optional[DateLike] = None
    end_date: Optional[DateLike] = None
    status: str = STATUS_ALL
    product: str = ""
    client: str = ""
    search_text: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "FilterSpec":
        """
        Build a FilterSpec from a mapping using either the front-end camelCase
        keys or the attribute names. Unknown keys are ignored.
        """
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            attr = _CAMEL_CASE_KEYS.get(key, key)
            if attr in known:
                values[attr] = value
        if values.get("status") in (None, ""):
            values["status"] = STATUS_ALL
        for attr in ("date_preset", "product", "client", "search_text"):
            if attr in values and values[attr] is None:
                values[attr] = ""
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {camel: getattr(self, attr) for camel, attr in _CAMEL_CASE_KEYS.items()}

    def with_value(self, key: str, value: Any) -> "FilterSpec":
        """
        Copy with one filter changed. ``key`` may be the attribute name or the
        front-end camelCase key.
        """
        attr = _CAMEL_CASE_KEYS.get(key, key)
        if attr not in {f.name for f in fields(self)}:
            raise ValueError(f"Unknown filter: {key}")
        return FilterSpec.from_dict({**self.to_dict(), attr: value})
