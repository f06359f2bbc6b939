from controller.actions import SingleSignalAction, UpdateGeneral, UpdateSingleSignal
from model.single_signal_config import SingleSignalConfig


def reduce_single_signal_config(config: SingleSignalConfig, action: SingleSignalAction) -> SingleSignalConfig:
    """Set one flat field; the input config is left untouched."""
    if isinstance(action, (UpdateGeneral, UpdateSingleSignal)):
        return config.with_value(action.field, action.value)
    raise TypeError(f"unsupported action {action!r}")
