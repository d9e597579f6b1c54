import importlib

from medistock.models.storage_entry import StorageEntry


def import_all_models() -> None:
    for module_name in ("medistock.models.storage_entry",):
        importlib.import_module(module_name)


__all__ = ["StorageEntry", "import_all_models"]
