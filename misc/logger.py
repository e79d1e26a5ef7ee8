import logging

from colorlog import ColoredFormatter

TRACE_LEVEL = 15  # ... info - trace - debug
logging.addLevelName(TRACE_LEVEL, "TRACE")


class LoggerEx(logging.Logger):
    def trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE_LEVEL):
            kwargs.setdefault("stacklevel", 2)
            self._log(TRACE_LEVEL, msg, args, **kwargs)


# color formatter
formatter = ColoredFormatter(
    "%(log_color)s[%(asctime)s] [%(filename)s:%(lineno)d] [%(levelname)s] %(message)s",
    datefmt="%d/%m/%y %H:%M:%S",
    log_colors={
        "TRACE": "white",
        "DEBUG": "blue",
        "INFO": "white",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    },
)

handler = logging.StreamHandler()
handler.setFormatter(fmt=formatter)

logger = LoggerEx("mediashelf")
logger.setLevel(logging.INFO)
logger.addHandler(handler)


def configure(level: str | int) -> None:
    """Set the service log level, accepting names like "TRACE" or "debug"."""
    if isinstance(level, str):
        name = level.strip().upper()
        level = TRACE_LEVEL if name == "TRACE" else logging.getLevelName(name)
        if not isinstance(level, int):
            logger.warning(f"Unknown log level {name!r}, keeping INFO")
            level = logging.INFO
    logger.setLevel(level)
    # route werkzeug's request log through the same handler, and only that one
    werkzeug = logging.getLogger("werkzeug")
    werkzeug.handlers = [handler]
    werkzeug.propagate = False
