# reference_controller.py
import logging
from typing import Any, Callable, Iterable, Mapping, NamedTuple, Optional

from PySide6 import QtCore

from controller.actions import InvalidActionError, parse_signal_action, parse_single_signal_action
from controller.signal_reducer import reduce_signal_config
from controller.single_signal_reducer import reduce_single_signal_config
from model.signal_config import hydrate
from model.single_signal_config import hydrate_single
from utils.service_requests import (
    build_single_start_request,
    build_start_request,
    build_stop_request,
    start_service_name,
    stop_service_name,
)
from view.signal_tree import build_settings_tree
from view.single_signal_tree import build_single_settings_tree

log = logging.getLogger(__name__)

PANEL_TITLE = "Reference Signal"


class PanelVariant(NamedTuple):
    name: str
    hydrate: Callable
    build_tree: Callable
    parse_action: Callable
    reduce: Callable
    start_request: Callable


MULTI_SIGNAL = PanelVariant(
    name="multi",
    hydrate=hydrate,
    build_tree=build_settings_tree,
    parse_action=parse_signal_action,
    reduce=reduce_signal_config,
    start_request=build_start_request,
)

SINGLE_SIGNAL = PanelVariant(
    name="single",
    hydrate=hydrate_single,
    build_tree=build_single_settings_tree,
    parse_action=parse_single_signal_action,
    reduce=reduce_single_signal_config,
    start_request=build_single_start_request,
)

VARIANTS = {v.name: v for v in (MULTI_SIGNAL, SINGLE_SIGNAL)}


class ReferenceController(QtCore.QObject):
    """Connects a settings editor host to one panel variant.

    The host feeds editor actions into handle_action() and topic lists into
    set_topics(); it persists whatever config_changed carries and renders
    whatever tree_changed carries. call_service(name, payload) is expected to
    send the request and return without waiting for the reply.
    """
    config_changed = QtCore.Signal(object)   # new config, after every edit
    tree_changed = QtCore.Signal(object)     # new settings tree
    status = QtCore.Signal(str)
    error = QtCore.Signal(str)

    def __init__(self, variant: PanelVariant = MULTI_SIGNAL, initial_state: Optional[Mapping[str, Any]] = None,
                 call_service: Optional[Callable[[str, Mapping[str, Any]], Any]] = None, parent=None):
        super().__init__(parent)
        self.variant = variant
        self.config = variant.hydrate(initial_state)
        self.topics = None
        self.call_service = call_service
        self._tree = None

    def settings_tree(self):
        if self._tree is None:
            self._tree = self.variant.build_tree(self.config, self.topics)
        return self._tree

    def set_topics(self, topics: Optional[Iterable[Any]]):
        self.topics = list(topics) if topics is not None else None
        self._refresh_tree()

    @QtCore.Slot(object)
    def handle_action(self, host_action: Mapping[str, Any]):
        try:
            action = self.variant.parse_action(host_action)
        except InvalidActionError as ex:
            self._report_error(f"Ignored settings action: {ex}")
            return
        self.dispatch(action)

    def dispatch(self, action):
        try:
            new_config = self.variant.reduce(self.config, action)
        except IndexError as ex:
            self._report_error(f"Ignored settings action: {ex}")
            return
        log.debug("Applied %r", action)
        self.config = new_config
        self.config_changed.emit(new_config)
        self._refresh_tree()

    def _refresh_tree(self):
        self._tree = self.variant.build_tree(self.config, self.topics)
        self.tree_changed.emit(self._tree)

    @QtCore.Slot()
    def start(self):
        self._call(start_service_name(self.config.topic_name), self.variant.start_request(self.config))

    @QtCore.Slot()
    def stop(self):
        self._call(stop_service_name(self.config.topic_name), build_stop_request())

    def _call(self, name: str, payload: Mapping[str, Any]):
        if self.call_service is None:
            self._report_error(f"No service caller available, {name} not sent")
            return
        self._log(f"Calling {name}")
        try:
            self.call_service(name, payload)
        except Exception as ex:
            self._report_error(f"Service call {name} failed: {ex}")

    def _log(self, text: str):
        log.info(text)
        self.status.emit(text)

    def _report_error(self, text: str):
        log.warning(text)
        self.error.emit(text)
