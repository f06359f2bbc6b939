"""Settings tree for the multi-signal panel.

One "General" node with the publish settings and one "Signals" node holding a
child per configured signal. Which numeric fields a signal node shows depends
on its signal type (SIGNAL_FIELD_SPECS); hidden fields keep their stored
values.
"""
from typing import Dict, Iterable, List, Optional, Tuple

from model.general import GeneralField
from model.signal_config import (
    SignalConfig,
    SignalField,
    SignalParameters,
    SignalType,
    default_signal,
)
from model.topic import Topic, topics_with_schema
from utils.memo import memoize_by_identity
from view.tree_nodes import SelectOption, SettingsTreeAction, SettingsTreeField, SettingsTreeNode

MULTI_ARRAY_SCHEMA = "std_msgs/msg/Float64MultiArray"

ADD_SIGNAL = "add-signal"
DELETE_SIGNAL = "delete-signal"

_ALL = frozenset(SignalType)
_WAVEFORMS = frozenset({SignalType.SINE, SignalType.SQUARE, SignalType.TRIANGLE, SignalType.SAWTOOTH})

# Numeric fields of a signal node, in display order: label, editor limits and
# the signal types the field applies to.
SIGNAL_FIELD_SPECS = {
    # step: value before start_time (and after end_time); ramp: value before start_time
    SignalField.INITIAL_VALUE: {"label": "Initial value",
                                "types": frozenset({SignalType.STEP, SignalType.RAMP, SignalType.SPLINE})},
    # value between start_time and end_time
    SignalField.FINAL_VALUE:   {"label": "Final value",
                                "types": frozenset({SignalType.STEP, SignalType.SPLINE})},
    SignalField.START_TIME:    {"label": "Start time (s)", "min": 0, "types": _ALL},
    SignalField.END_TIME:      {"label": "End time (s)", "min": 0, "placeholder": "inf", "types": _ALL},
    SignalField.SLOPE:         {"label": "Slope", "types": frozenset({SignalType.RAMP})},
    SignalField.OFFSET:        {"label": "Offset", "types": _WAVEFORMS | {SignalType.CHIRP}},
    SignalField.AMPLITUDE:     {"label": "Amplitude", "types": _WAVEFORMS | {SignalType.CHIRP}},
    SignalField.FREQUENCY:     {"label": "Frequency (Hz)", "min": 0, "types": _WAVEFORMS},
    SignalField.PHASE:         {"label": "Phase (deg)", "types": _WAVEFORMS | {SignalType.CHIRP}},
    # chirp: frequency-swept cosine
    SignalField.INITIAL_FREQUENCY: {"label": "Initial frequency (Hz)", "min": 0,
                                    "types": frozenset({SignalType.CHIRP})},
    SignalField.TARGET_FREQUENCY:  {"label": "Target frequency (Hz)", "min": 0,
                                    "types": frozenset({SignalType.CHIRP})},
    SignalField.TARGET_TIME:       {"label": "Target time (s)", "min": 0, "placeholder": "inf",
                                    "types": frozenset({SignalType.CHIRP})},
}

SIGNAL_TYPE_OPTIONS = tuple(SelectOption(t.value.capitalize(), t.value) for t in SignalType)


def visible_signal_fields(signal_type: SignalType) -> List[SignalField]:
    return [key for key, spec in SIGNAL_FIELD_SPECS.items() if signal_type in spec["types"]]


def _number_field(key: SignalField, value) -> SettingsTreeField:
    spec = SIGNAL_FIELD_SPECS[key]
    return SettingsTreeField(
        label=spec["label"],
        input="number",
        value=value,
        min=spec.get("min"),
        placeholder=spec.get("placeholder"),
    )


@memoize_by_identity()
def make_signal_node(index: int, path: SignalParameters, can_delete: bool) -> SettingsTreeNode:
    fields = {
        SignalField.SIGNAL_TYPE.value: SettingsTreeField(
            label="Signal type",
            input="select",
            value=path.signal_type.value,
            options=SIGNAL_TYPE_OPTIONS,
        ),
    }
    for key in visible_signal_fields(path.signal_type):
        fields[key.value] = _number_field(key, path.get(key))
    actions = (SettingsTreeAction(DELETE_SIGNAL, "Delete signal", icon="Clear"),) if can_delete else ()
    return SettingsTreeNode(label=f"Signal {index + 1}", fields=fields, actions=actions)


@memoize_by_identity()
def make_signal_list_node(paths: Tuple[SignalParameters, ...]) -> SettingsTreeNode:
    if not paths:
        # An empty list is shown as one implicit default signal that cannot be deleted.
        children = {"0": make_signal_node(0, default_signal(), False)}
    else:
        can_delete = len(paths) > 1
        children = {str(i): make_signal_node(i, path, can_delete) for i, path in enumerate(paths)}
    return SettingsTreeNode(
        label="Signals",
        children=children,
        actions=(SettingsTreeAction(ADD_SIGNAL, "Add signal", icon="Add"),),
    )


def make_general_node(config: SignalConfig, topics: Optional[Iterable[Topic]]) -> SettingsTreeNode:
    options = tuple(SelectOption(t.name, t.name) for t in topics_with_schema(topics, MULTI_ARRAY_SCHEMA))
    return SettingsTreeNode(
        label="General",
        fields={
            GeneralField.TOPIC_NAME.value: SettingsTreeField(
                label="Topic", input="select", value=config.topic_name, options=options),
            GeneralField.PUBLISH_RATE.value: SettingsTreeField(
                label="Publish rate (Hz)", input="number", value=config.publish_rate, min=0),
            # left blank for an infinite signal
            GeneralField.TOTAL_TIME.value: SettingsTreeField(
                label="Total time (s)", input="number", value=config.total_time, min=0, placeholder="inf"),
        },
    )


def build_settings_tree(config: SignalConfig, topics: Optional[Iterable[Topic]] = None) -> Dict[str, SettingsTreeNode]:
    return {
        "general": make_general_node(config, topics),
        "paths": make_signal_list_node(config.paths),
    }
