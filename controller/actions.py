"""Typed edit actions for both panel variants.

Every action validates its address and value when it is constructed, so the
reducers only ever see edits they can apply. Host actions (the dicts the
settings editor emits) are turned into typed actions by
parse_signal_action / parse_single_signal_action.
"""
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Tuple, Union

from model.general import GeneralField, coerce_general_value
from model.signal_config import SignalField, coerce_signal_value
from model.single_signal_config import SingleSignalField, coerce_single_signal_value
from view.signal_tree import ADD_SIGNAL, DELETE_SIGNAL


class InvalidActionError(ValueError):
    pass


def _member(enum_cls, key):
    try:
        return enum_cls(key)
    except ValueError:
        raise InvalidActionError(f"unknown {enum_cls.__name__} {key!r}") from None


def _checked(coerce: Callable, key, value):
    try:
        return coerce(key, value)
    except (TypeError, ValueError) as ex:
        raise InvalidActionError(f"{key.value}: {ex}") from ex


def _index(value) -> int:
    if isinstance(value, bool):
        raise InvalidActionError(f"invalid signal index {value!r}")
    try:
        index = int(value)
    except (TypeError, ValueError):
        raise InvalidActionError(f"invalid signal index {value!r}") from None
    if index < 0:
        raise InvalidActionError(f"invalid signal index {value!r}")
    return index


@dataclass(frozen=True)
class UpdateGeneral:
    field: GeneralField
    value: Any

    def __post_init__(self):
        key = _member(GeneralField, self.field)
        object.__setattr__(self, "field", key)
        object.__setattr__(self, "value", _checked(coerce_general_value, key, self.value))


@dataclass(frozen=True)
class UpdateSignal:
    index: int
    field: SignalField
    value: Any

    def __post_init__(self):
        key = _member(SignalField, self.field)
        object.__setattr__(self, "index", _index(self.index))
        object.__setattr__(self, "field", key)
        object.__setattr__(self, "value", _checked(coerce_signal_value, key, self.value))


@dataclass(frozen=True)
class AddSignal:
    pass


@dataclass(frozen=True)
class DeleteSignal:
    index: int

    def __post_init__(self):
        object.__setattr__(self, "index", _index(self.index))


@dataclass(frozen=True)
class UpdateSingleSignal:
    field: SingleSignalField
    value: Any

    def __post_init__(self):
        key = _member(SingleSignalField, self.field)
        object.__setattr__(self, "field", key)
        object.__setattr__(self, "value", _checked(coerce_single_signal_value, key, self.value))


SignalAction = Union[UpdateGeneral, UpdateSignal, AddSignal, DeleteSignal]
SingleSignalAction = Union[UpdateGeneral, UpdateSingleSignal]


def _unpack(host_action: Mapping[str, Any]) -> Tuple[str, Mapping[str, Any], Tuple[str, ...]]:
    kind = host_action.get("action")
    payload = host_action.get("payload") or {}
    path = tuple(str(p) for p in (payload.get("path") or ()))
    return kind, payload, path


def parse_signal_action(host_action: Mapping[str, Any]) -> SignalAction:
    """Convert a settings editor action into a multi-signal action."""
    kind, payload, path = _unpack(host_action)
    if kind == "update":
        value = payload.get("value")
        if path[:1] == ("general",):
            path = path[1:]
        if len(path) == 1:
            return UpdateGeneral(_member(GeneralField, path[0]), value)
        if len(path) == 3 and path[0] == "paths":
            return UpdateSignal(_index(path[1]), _member(SignalField, path[2]), value)
        raise InvalidActionError(f"unknown field address {list(path)}")
    if kind == "perform-node-action":
        action_id = payload.get("id")
        if action_id == ADD_SIGNAL:
            return AddSignal()
        if action_id == DELETE_SIGNAL:
            if len(path) == 2 and path[0] == "paths":
                return DeleteSignal(_index(path[1]))
            raise InvalidActionError(f"{DELETE_SIGNAL} on unexpected node {list(path)}")
        raise InvalidActionError(f"unknown node action {action_id!r}")
    raise InvalidActionError(f"unknown action kind {kind!r}")


def parse_single_signal_action(host_action: Mapping[str, Any]) -> SingleSignalAction:
    """Convert a settings editor action into a single-signal action."""
    kind, payload, path = _unpack(host_action)
    if kind != "update":
        raise InvalidActionError(f"unsupported action kind {kind!r}")
    value = payload.get("value")
    if len(path) == 2 and path[0] == "general":
        return UpdateGeneral(_member(GeneralField, path[1]), value)
    if len(path) == 2 and path[0] == "signal":
        return UpdateSingleSignal(_member(SingleSignalField, path[1]), value)
    if len(path) == 1:
        if path[0] in {key.value for key in GeneralField}:
            return UpdateGeneral(GeneralField(path[0]), value)
        return UpdateSingleSignal(_member(SingleSignalField, path[0]), value)
    raise InvalidActionError(f"unknown field address {list(path)}")
