import logging
from dataclasses import replace

from controller.actions import AddSignal, DeleteSignal, SignalAction, UpdateGeneral, UpdateSignal
from model.signal_config import SignalConfig, default_signal

log = logging.getLogger(__name__)


def reduce_signal_config(config: SignalConfig, action: SignalAction) -> SignalConfig:
    """Apply one settings action and return the new config.

    `config` is never modified; entries that are not touched are shared with
    the returned config.
    """
    if isinstance(action, UpdateGeneral):
        return replace(config, **{action.field.attr: action.value})

    if isinstance(action, UpdateSignal):
        paths = config.paths
        if not paths and action.index == 0:
            # The tree shows index 0 for an empty list; make that entry real.
            paths = (default_signal(),)
        if action.index >= len(paths):
            raise IndexError(f"signal index {action.index} out of range ({len(paths)} signals)")
        updated = paths[action.index].with_value(action.field, action.value)
        return replace(config, paths=paths[:action.index] + (updated,) + paths[action.index + 1:])

    if isinstance(action, AddSignal):
        added = (default_signal(),)
        if not config.paths:
            # The empty list was already showing one implicit default entry.
            added = (default_signal(), default_signal())
        log.debug("Adding signal (%d -> %d)", len(config.paths), len(config.paths) + len(added))
        return replace(config, paths=config.paths + added)

    if isinstance(action, DeleteSignal):
        if action.index >= len(config.paths):
            raise IndexError(f"signal index {action.index} out of range ({len(config.paths)} signals)")
        log.debug("Deleting signal %d", action.index)
        return replace(config, paths=config.paths[:action.index] + config.paths[action.index + 1:])

    raise TypeError(f"unsupported action {action!r}")
