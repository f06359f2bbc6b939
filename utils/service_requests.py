"""Request payloads for the reference signal generator services.

The generator exposes ``<topic>/start`` and ``<topic>/stop``. Unbounded times
are sent as +inf.
"""
from enum import Enum
from typing import Any, Dict

from model.bounds import bound_to_float
from model.signal_config import BOUND_FIELDS, SignalConfig, SignalField
from model.single_signal_config import SINGLE_BOUND_FIELDS, SingleSignalConfig, SingleSignalField


def start_service_name(topic_name: str) -> str:
    return topic_name + "/start"


def stop_service_name(topic_name: str) -> str:
    return topic_name + "/stop"


def _encode(value, bound: bool):
    if bound:
        return bound_to_float(value)
    return value.value if isinstance(value, Enum) else value


def build_start_request(config: SignalConfig) -> Dict[str, Any]:
    """One list per signal field, positionally aligned with config.paths."""
    request: Dict[str, Any] = {}
    for key in SignalField:
        bound = key in BOUND_FIELDS
        request[key.attr] = [_encode(path.get(key), bound) for path in config.paths]
    request["publish_rate"] = config.publish_rate
    request["total_time"] = bound_to_float(config.total_time)
    return request


def build_single_start_request(config: SingleSignalConfig) -> Dict[str, Any]:
    request: Dict[str, Any] = {}
    for key in SingleSignalField:
        request[key.attr] = _encode(config.get(key), key in SINGLE_BOUND_FIELDS)
    request["publish_rate"] = config.publish_rate
    request["total_time"] = bound_to_float(config.total_time)
    return request


def build_stop_request() -> Dict[str, Any]:
    return {}
