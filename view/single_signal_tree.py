"""Settings tree for the single-signal panel.

The config is flat, so the tree splits it into a "General" node and a
"Signal" node purely for display; both node keys are dropped again when an
edit is addressed back into the config.
"""
from typing import Dict, Iterable, List, Optional

from model.general import GeneralField
from model.single_signal_config import SingleSignalConfig, SingleSignalField, SingleSignalType
from model.topic import Topic, topics_with_schema
from utils.memo import memoize_by_identity
from view.tree_nodes import SelectOption, SettingsTreeField, SettingsTreeNode

FLOAT64_SCHEMA = "std_msgs/msg/Float64"

_WAVEFORMS = frozenset({
    SingleSignalType.SINE,
    SingleSignalType.SQUARE,
    SingleSignalType.TRIANGLE,
    SingleSignalType.SAWTOOTH,
})

SINGLE_FIELD_SPECS = {
    SingleSignalField.INITIAL_VALUE: {"label": "Initial value",
                                      "types": frozenset({SingleSignalType.STEP, SingleSignalType.RAMP})},
    SingleSignalField.FINAL_VALUE:   {"label": "Final value", "types": frozenset({SingleSignalType.STEP})},
    # a step switches at step_time, everything else starts at start_time
    SingleSignalField.STEP_TIME:     {"label": "Step time (s)", "min": 0,
                                      "types": frozenset({SingleSignalType.STEP})},
    SingleSignalField.START_TIME:    {"label": "Start time (s)", "min": 0,
                                      "types": frozenset(SingleSignalType) - {SingleSignalType.STEP}},
    SingleSignalField.SLOPE:         {"label": "Slope", "types": frozenset({SingleSignalType.RAMP})},
    SingleSignalField.OFFSET:        {"label": "Offset", "types": _WAVEFORMS | {SingleSignalType.CHIRP}},
    SingleSignalField.AMPLITUDE:     {"label": "Amplitude", "types": _WAVEFORMS | {SingleSignalType.CHIRP}},
    SingleSignalField.FREQUENCY:     {"label": "Frequency (Hz)", "min": 0, "types": _WAVEFORMS},
    SingleSignalField.INITIAL_FREQUENCY: {"label": "Initial frequency (Hz)", "min": 0,
                                          "types": frozenset({SingleSignalType.CHIRP})},
    SingleSignalField.TARGET_FREQUENCY:  {"label": "Target frequency (Hz)", "min": 0,
                                          "types": frozenset({SingleSignalType.CHIRP})},
    SingleSignalField.TARGET_TIME:       {"label": "Target time (s)", "min": 0, "placeholder": "inf",
                                          "types": frozenset({SingleSignalType.CHIRP})},
}

SINGLE_SIGNAL_TYPE_OPTIONS = tuple(SelectOption(t.value.capitalize(), t.value) for t in SingleSignalType)


def visible_single_fields(signal_type: SingleSignalType) -> List[SingleSignalField]:
    return [key for key, spec in SINGLE_FIELD_SPECS.items() if signal_type in spec["types"]]


@memoize_by_identity()
def _signal_node(signal_type: SingleSignalType, *values) -> SettingsTreeNode:
    fields = {
        SingleSignalField.SIGNAL_TYPE.value: SettingsTreeField(
            label="Signal type",
            input="select",
            value=signal_type.value,
            options=SINGLE_SIGNAL_TYPE_OPTIONS,
        ),
    }
    for key, value in zip(visible_single_fields(signal_type), values):
        spec = SINGLE_FIELD_SPECS[key]
        fields[key.value] = SettingsTreeField(
            label=spec["label"],
            input="number",
            value=value,
            min=spec.get("min"),
            placeholder=spec.get("placeholder"),
        )
    return SettingsTreeNode(label="Signal", fields=fields)


def make_single_signal_node(config: SingleSignalConfig) -> SettingsTreeNode:
    # Keyed on the visible values only, so edits to hidden or general fields
    # reuse the previous node.
    keys = visible_single_fields(config.signal_type)
    return _signal_node(config.signal_type, *(config.get(k) for k in keys))


def build_single_settings_tree(config: SingleSignalConfig,
                               topics: Optional[Iterable[Topic]] = None) -> Dict[str, SettingsTreeNode]:
    options = tuple(SelectOption(t.name, t.name) for t in topics_with_schema(topics, FLOAT64_SCHEMA))
    general = SettingsTreeNode(
        label="General",
        fields={
            GeneralField.TOPIC_NAME.value: SettingsTreeField(
                label="Topic", input="select", value=config.topic_name, options=options),
            GeneralField.PUBLISH_RATE.value: SettingsTreeField(
                label="Publish rate (Hz)", input="number", value=config.publish_rate, min=0),
            GeneralField.TOTAL_TIME.value: SettingsTreeField(
                label="Total time (s)", input="number", value=config.total_time, min=0, placeholder="inf"),
        },
    )
    return {"general": general, "signal": make_single_signal_node(config)}
