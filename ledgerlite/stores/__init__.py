from importlib import import_module

from ledgerlite.config import storage_config
from ledgerlite.core.errors import ConfigError


def get_store(name, config):
    try:
        path = config['store_modules'][name]
    except KeyError:
        raise ConfigError(f"Unknown storage backend '{name}'") from None
    module_name, cls_name = path.rsplit('.', 1)
    mod = import_module(module_name)
    return getattr(mod, cls_name)(storage_config(config))
