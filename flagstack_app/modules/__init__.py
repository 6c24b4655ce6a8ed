"""Feature modules. Each one exposes a blueprint listed in ``core.module_registry``."""
