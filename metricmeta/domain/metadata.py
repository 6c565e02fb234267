from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Mapping

METRIC_TYPE_LABEL = "__metric_type__"
METRIC_HELP_LABEL = "__metric_help__"
METRIC_UNIT_LABEL = "__metric_unit__"
METRIC_NAME_LABEL = "__name__"

METADATA_LABELS = frozenset({METRIC_TYPE_LABEL, METRIC_HELP_LABEL, METRIC_UNIT_LABEL})

METRIC_TYPES = frozenset(
    {
        "counter",
        "gauge",
        "histogram",
        "gaugehistogram",
        "summary",
        "info",
        "stateset",
        "unknown",
        "untyped",
    }
)


def is_metadata_label(name: str) -> bool:
    return name in METADATA_LABELS


@dataclass(frozen=True, slots=True)
class MetadataEntry:
    """Type, help text and unit describing a metric.

    An entry with all three fields empty is the "zero" entry: the series
    carried no metadata labels.
    """

    type: str = ""
    help: str = ""
    unit: str = ""

    @classmethod
    def from_labels(cls, labels: Mapping[str, str]) -> MetadataEntry:
        return cls(
            type=labels.get(METRIC_TYPE_LABEL, ""),
            help=labels.get(METRIC_HELP_LABEL, ""),
            unit=labels.get(METRIC_UNIT_LABEL, ""),
        )

    @classmethod
    def from_json(cls, text: str) -> MetadataEntry:
        """Parse the stored JSON form.

        Raises:
            ValueError: If ``text`` is not a JSON object of string fields.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"failed to unmarshal metadata: {e}") from e
        if not isinstance(data, dict):
            raise ValueError("failed to unmarshal metadata: expected a JSON object")
        fields = {}
        for key in ("type", "help", "unit"):
            value = data.get(key, "")
            if not isinstance(value, str):
                raise ValueError(f"failed to unmarshal metadata: {key} must be a string")
            fields[key] = value
        return cls(**fields)

    def is_zero(self) -> bool:
        return not (self.type or self.help or self.unit)

    def to_json(self) -> str:
        # Zero entries are stored as "" so they can be filtered out cheaply.
        if self.is_zero():
            return ""
        return json.dumps(asdict(self), separators=(",", ":"))

    def to_dict(self) -> dict[str, str]:
        return asdict(self)
