"""Tests for start/stop request payloads, including a full edit session."""

import math

from controller.actions import parse_signal_action
from controller.signal_reducer import reduce_signal_config
from model.signal_config import SignalConfig, SignalField, SignalParameters, SignalType, hydrate
from utils.service_requests import (
    build_start_request,
    build_stop_request,
    start_service_name,
    stop_service_name,
)
from view.signal_tree import build_settings_tree


def _update(path, value):
    return {"action": "update", "payload": {"path": list(path), "value": value}}


def test_service_names():
    assert start_service_name("/ref") == "/ref/start"
    assert stop_service_name("/ref") == "/ref/stop"
    assert build_stop_request() == {}


def test_edit_session_to_start_request():
    config = hydrate(None)
    for path, value in (
        (["general", "topicName"], "/ref"),
        (["general", "publishRate"], 10),
        (["paths", "0", "signalType"], "step"),
        (["paths", "0", "initialValue"], 0),
        (["paths", "0", "finalValue"], 5),
        (["paths", "0", "startTime"], 2),
    ):
        config = reduce_signal_config(config, parse_signal_action(_update(path, value)))

    request = build_start_request(config)
    assert start_service_name(config.topic_name) == "/ref/start"
    assert request["signal_type"] == ["step"]
    assert request["initial_value"] == [0]
    assert request["final_value"] == [5]
    assert request["start_time"] == [2]
    assert request["end_time"] == [math.inf]
    assert request["publish_rate"] == 10
    assert request["total_time"] == math.inf

    node = build_settings_tree(config)["paths"].children["0"]
    assert set(node.fields) == {"signalType", "initialValue", "finalValue", "startTime", "endTime"}


def test_lists_are_positionally_aligned():
    paths = (
        SignalParameters(signal_type=SignalType.RAMP, slope=3.0, end_time=4.0),
        SignalParameters(signal_type=SignalType.CHIRP, target_time=None, phase=45.0),
        SignalParameters(signal_type=SignalType.SINE, frequency=2.0),
    )
    request = build_start_request(SignalConfig(topic_name="/ref", total_time=20.0, paths=paths))
    for key in SignalField:
        assert len(request[key.attr]) == 3
    assert request["signal_type"] == ["ramp", "chirp", "sine"]
    assert request["slope"] == [3.0, 1, 1]
    assert request["end_time"] == [4.0, math.inf, math.inf]
    assert request["target_time"] == [1, math.inf, 1]
    assert request["phase"] == [0, 45.0, 0]
    assert request["frequency"] == [1, 1, 2.0]
    assert request["total_time"] == 20.0


def test_request_keys():
    request = build_start_request(SignalConfig())
    assert set(request) == {key.attr for key in SignalField} | {"publish_rate", "total_time"}


def test_empty_paths_give_empty_lists():
    request = build_start_request(SignalConfig(paths=()))
    assert request["signal_type"] == []
    assert request["end_time"] == []
    assert request["publish_rate"] == 1
