import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from model.bounds import UNBOUNDED, as_bound, as_number
from model.general import GeneralField, coerce_general_value

log = logging.getLogger(__name__)


class SignalType(str, Enum):
    STEP = "step"
    RAMP = "ramp"
    SPLINE = "spline"
    SINE = "sine"
    SQUARE = "square"
    TRIANGLE = "triangle"
    SAWTOOTH = "sawtooth"
    CHIRP = "chirp"


class SignalField(str, Enum):
    """Persisted keys of one signal entry (also its settings tree field keys)."""
    SIGNAL_TYPE = "signalType"
    INITIAL_VALUE = "initialValue"
    FINAL_VALUE = "finalValue"
    START_TIME = "startTime"
    END_TIME = "endTime"
    SLOPE = "slope"
    OFFSET = "offset"
    AMPLITUDE = "amplitude"
    FREQUENCY = "frequency"
    PHASE = "phase"
    INITIAL_FREQUENCY = "initialFrequency"
    TARGET_FREQUENCY = "targetFrequency"
    TARGET_TIME = "targetTime"

    @property
    def attr(self) -> str:
        return _SIGNAL_ATTRS[self]


_SIGNAL_ATTRS = {
    SignalField.SIGNAL_TYPE: "signal_type",
    SignalField.INITIAL_VALUE: "initial_value",
    SignalField.FINAL_VALUE: "final_value",
    SignalField.START_TIME: "start_time",
    SignalField.END_TIME: "end_time",
    SignalField.SLOPE: "slope",
    SignalField.OFFSET: "offset",
    SignalField.AMPLITUDE: "amplitude",
    SignalField.FREQUENCY: "frequency",
    SignalField.PHASE: "phase",
    SignalField.INITIAL_FREQUENCY: "initial_frequency",
    SignalField.TARGET_FREQUENCY: "target_frequency",
    SignalField.TARGET_TIME: "target_time",
}

# Fields that may be left unbounded (stored as None)
BOUND_FIELDS = frozenset({SignalField.END_TIME, SignalField.TARGET_TIME})

# Fields the editor restricts to >= 0
NON_NEGATIVE_FIELDS = frozenset({
    SignalField.START_TIME,
    SignalField.END_TIME,
    SignalField.FREQUENCY,
    SignalField.INITIAL_FREQUENCY,
    SignalField.TARGET_FREQUENCY,
    SignalField.TARGET_TIME,
})


def coerce_signal_value(key: SignalField, value: Any):
    """Validate and normalize a value for one signal field.

    Raises ValueError / TypeError for values the field cannot hold.
    """
    if key is SignalField.SIGNAL_TYPE:
        return SignalType(value)
    res = as_bound(value) if key in BOUND_FIELDS else as_number(value)
    if res is not None and key in NON_NEGATIVE_FIELDS and res < 0:
        raise ValueError(f"{key.value} must not be negative, got {res}")
    return res


@dataclass(frozen=True)
class SignalParameters:
    signal_type: SignalType = SignalType.STEP
    initial_value: float = 0.0          # value from t = 0 to start_time
    final_value: float = 1.0            # value from start_time to end_time
    start_time: float = 0.0             # seconds
    end_time: Optional[float] = UNBOUNDED
    slope: float = 1.0                  # ramp rate, units/s
    offset: float = 0.0                 # DC offset of waveforms
    amplitude: float = 1.0
    frequency: float = 1.0              # Hz
    phase: float = 0.0                  # degrees
    initial_frequency: float = 0.0      # chirp, Hz at start_time
    target_frequency: float = 1.0       # chirp, Hz at target_time
    target_time: Optional[float] = 1.0  # chirp, seconds

    def get(self, key: SignalField):
        return getattr(self, key.attr)

    def with_value(self, key: SignalField, value) -> "SignalParameters":
        return replace(self, **{key.attr: value})

    def to_dict(self) -> Dict[str, Any]:
        out = {}
        for key in SignalField:
            value = self.get(key)
            out[key.value] = value.value if isinstance(value, SignalType) else value
        return out

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> "SignalParameters":
        # Missing keys keep their defaults; None only means something for
        # unbounded-capable fields.
        kwargs = {}
        for key in SignalField:
            if key.value not in d:
                continue
            value = d[key.value]
            if value is None and key not in BOUND_FIELDS:
                continue
            kwargs[key.attr] = coerce_signal_value(key, value)
        unknown = set(d) - {key.value for key in SignalField}
        if unknown:
            log.debug("Ignoring unknown signal keys: %s", sorted(unknown))
        return SignalParameters(**kwargs)


_DEFAULT_SIGNAL = SignalParameters()


def default_signal() -> SignalParameters:
    # Shared instance; SignalParameters is immutable.
    return _DEFAULT_SIGNAL


@dataclass(frozen=True)
class SignalConfig:
    topic_name: str = ""
    publish_rate: float = 1.0               # Hz
    total_time: Optional[float] = UNBOUNDED  # seconds
    paths: Tuple[SignalParameters, ...] = (_DEFAULT_SIGNAL,)

    def to_dict(self) -> Dict[str, Any]:
        out = {key.value: getattr(self, key.attr) for key in GeneralField}
        out["paths"] = [path.to_dict() for path in self.paths]
        return out


def hydrate(partial: Union[SignalConfig, Mapping[str, Any], None] = None) -> SignalConfig:
    """Build a SignalConfig from host state, filling in missing fields.

    `partial` is the persisted camelCase dict (possibly incomplete or None).
    A SignalConfig is returned unchanged, so hydrate is idempotent.
    """
    if isinstance(partial, SignalConfig):
        return partial
    remaining = dict(partial or {})
    kwargs = {}
    for key in GeneralField:
        value = remaining.pop(key.value, None)
        if value is not None:
            kwargs[key.attr] = coerce_general_value(key, value)

    raw_paths = remaining.pop("paths", None)
    if raw_paths is not None:
        kwargs["paths"] = tuple(
            p if isinstance(p, SignalParameters) else SignalParameters.from_dict(p)
            for p in raw_paths
        )

    if remaining:
        log.debug("Ignoring unknown config keys: %s", sorted(remaining))
    return SignalConfig(**kwargs)
