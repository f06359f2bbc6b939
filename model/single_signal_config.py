import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from model.bounds import UNBOUNDED, as_bound, as_number
from model.general import GeneralField, coerce_general_value

log = logging.getLogger(__name__)


class SingleSignalType(str, Enum):
    STEP = "step"
    RAMP = "ramp"
    SINE = "sine"
    SQUARE = "square"
    TRIANGLE = "triangle"
    SAWTOOTH = "sawtooth"
    CHIRP = "chirp"


class SingleSignalField(str, Enum):
    SIGNAL_TYPE = "signalType"
    INITIAL_VALUE = "initialValue"
    FINAL_VALUE = "finalValue"
    STEP_TIME = "stepTime"
    START_TIME = "startTime"
    SLOPE = "slope"
    OFFSET = "offset"
    AMPLITUDE = "amplitude"
    FREQUENCY = "frequency"
    INITIAL_FREQUENCY = "initialFrequency"
    TARGET_FREQUENCY = "targetFrequency"
    TARGET_TIME = "targetTime"

    @property
    def attr(self) -> str:
        return _SINGLE_ATTRS[self]


_SINGLE_ATTRS = {
    SingleSignalField.SIGNAL_TYPE: "signal_type",
    SingleSignalField.INITIAL_VALUE: "initial_value",
    SingleSignalField.FINAL_VALUE: "final_value",
    SingleSignalField.STEP_TIME: "step_time",
    SingleSignalField.START_TIME: "start_time",
    SingleSignalField.SLOPE: "slope",
    SingleSignalField.OFFSET: "offset",
    SingleSignalField.AMPLITUDE: "amplitude",
    SingleSignalField.FREQUENCY: "frequency",
    SingleSignalField.INITIAL_FREQUENCY: "initial_frequency",
    SingleSignalField.TARGET_FREQUENCY: "target_frequency",
    SingleSignalField.TARGET_TIME: "target_time",
}

SINGLE_BOUND_FIELDS = frozenset({SingleSignalField.TARGET_TIME})

SINGLE_NON_NEGATIVE_FIELDS = frozenset({
    SingleSignalField.STEP_TIME,
    SingleSignalField.START_TIME,
    SingleSignalField.FREQUENCY,
    SingleSignalField.INITIAL_FREQUENCY,
    SingleSignalField.TARGET_FREQUENCY,
    SingleSignalField.TARGET_TIME,
})


def coerce_single_signal_value(key: SingleSignalField, value: Any):
    if key is SingleSignalField.SIGNAL_TYPE:
        return SingleSignalType(value)
    res = as_bound(value) if key in SINGLE_BOUND_FIELDS else as_number(value)
    if res is not None and key in SINGLE_NON_NEGATIVE_FIELDS and res < 0:
        raise ValueError(f"{key.value} must not be negative, got {res}")
    return res


@dataclass(frozen=True)
class SingleSignalConfig:
    """Publish settings and exactly one implicit signal, flattened."""
    topic_name: str = ""
    publish_rate: float = 1.0
    total_time: Optional[float] = UNBOUNDED
    signal_type: SingleSignalType = SingleSignalType.STEP
    initial_value: float = 0.0
    final_value: float = 1.0
    step_time: float = 0.0              # step only
    start_time: float = 0.0             # every other type
    slope: float = 1.0
    offset: float = 0.0
    amplitude: float = 1.0
    frequency: float = 1.0
    initial_frequency: float = 0.0
    target_frequency: float = 1.0
    target_time: Optional[float] = 1.0

    def get(self, key: Union[GeneralField, SingleSignalField]):
        return getattr(self, key.attr)

    def with_value(self, key: Union[GeneralField, SingleSignalField], value) -> "SingleSignalConfig":
        return replace(self, **{key.attr: value})

    def to_dict(self) -> Dict[str, Any]:
        out = {key.value: getattr(self, key.attr) for key in GeneralField}
        for key in SingleSignalField:
            value = getattr(self, key.attr)
            out[key.value] = value.value if isinstance(value, SingleSignalType) else value
        return out


def default_config() -> SingleSignalConfig:
    return SingleSignalConfig()


def hydrate_single(partial: Union[SingleSignalConfig, Mapping[str, Any], None] = None) -> SingleSignalConfig:
    if isinstance(partial, SingleSignalConfig):
        return partial
    remaining = dict(partial or {})
    kwargs = {}
    for key in GeneralField:
        value = remaining.pop(key.value, None)
        if value is not None:
            kwargs[key.attr] = coerce_general_value(key, value)
    for key in SingleSignalField:
        if key.value not in remaining:
            continue
        value = remaining.pop(key.value)
        if value is None and key not in SINGLE_BOUND_FIELDS:
            continue
        kwargs[key.attr] = coerce_single_signal_value(key, value)
    if remaining:
        log.debug("Ignoring unknown config keys: %s", sorted(remaining))
    return SingleSignalConfig(**kwargs)
