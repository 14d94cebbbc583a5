"""Plugin registry: maps data-source kind → lazy-import class path."""

AVAILABLE_PLUGINS: dict[str, str] = {
    "baserow": "toolsmith.plugins.baserow.BaserowQueryService",
}


def import_plugin(dotted_path: str):
    """Import a query service class from its dotted module path."""
    import importlib

    module_path, class_name = dotted_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)
