import sys

from .config import LifecycleConfig
from .errors import StartupError
from .logger import logger, setup_logger
from .metadata import MetadataClient
from .monitor import LifecycleMonitor
from .notifier import Notifier
from .terminator import InstanceTerminator


def build_monitor(config: LifecycleConfig) -> LifecycleMonitor:
    return LifecycleMonitor(
        config=config,
        metadata=MetadataClient(),
        notifier=Notifier(url=config.notify_url),
        terminator=InstanceTerminator(),
    )


def main() -> None:
    config = LifecycleConfig.from_env()
    setup_logger(level=config.log_level)

    monitor = build_monitor(config)

    try:
        outcome = monitor.run()
    except StartupError as e:
        logger.critical(f"Startup failed: {e}")
        sys.exit(1)

    logger.info(f"Monitoring ended: {outcome.value}")
    sys.exit(0)


def cli() -> None:
    try:
        main()
    except KeyboardInterrupt:
        logger.warning("Interrupted, exiting without terminating the instance.")
        sys.exit(130)


if __name__ == "__main__":
    cli()
