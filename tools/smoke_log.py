import logging

from log_router.core.config_manager import ConfigManager
from log_router.core.logging import setup_logging

# Show the router's own lifecycle events for this utility script
setup_logging(logging.INFO)

if __name__ == "__main__":
    settings = ConfigManager().get_settings()
    router = settings.build_router()
    router.trace("Smoke test started, level mask %d", router.get_active_level())
    router.info("Writing to %s", router.log_path)
    router.warning("This is a warning")
    router.error("This is an error")
    router.stop()
