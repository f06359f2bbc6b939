from enum import Enum
from typing import Any

from model.bounds import as_bound, as_number


class GeneralField(str, Enum):
    """Top-level publish settings shared by both panel variants."""
    TOPIC_NAME = "topicName"
    PUBLISH_RATE = "publishRate"
    TOTAL_TIME = "totalTime"

    @property
    def attr(self) -> str:
        return _GENERAL_ATTRS[self]


_GENERAL_ATTRS = {
    GeneralField.TOPIC_NAME: "topic_name",
    GeneralField.PUBLISH_RATE: "publish_rate",
    GeneralField.TOTAL_TIME: "total_time",
}


def coerce_general_value(key: GeneralField, value: Any):
    if key is GeneralField.TOPIC_NAME:
        if not isinstance(value, str):
            raise TypeError(f"topic name must be a string, got {value!r}")
        return value
    if key is GeneralField.PUBLISH_RATE:
        rate = as_number(value)
        if rate <= 0:
            raise ValueError(f"publish rate must be positive, got {rate}")
        return rate
    total = as_bound(value)
    if total is not None and total < 0:
        raise ValueError(f"total time must not be negative, got {total}")
    return total
