import logging

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def enable_diagnostics(level: str = "INFO"):
    """
    Enable diagnostics logging

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    numeric = getattr(logging, level.upper())
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger("msl_core").setLevel(numeric)
    logging.getLogger(__name__).debug(f"Diagnostics enabled at {level} level")
