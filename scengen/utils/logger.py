import os
from datetime import datetime


class Logger:
    def __init__(self, name: str = "scengen", debug_mode: bool = True):
        self.name = name
        self.debug_mode = debug_mode

    def _log(self, level: str, msg: str):
        now = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
        print(f"[{now}] [{level}] [{self.name}] {msg}")

    def child(self, suffix: str) -> "Logger":
        return Logger(f"{self.name}.{suffix}", self.debug_mode)

    def debug(self, msg: str):
        if self.debug_mode:
            self._log("DEBUG", msg)

    def info(self, msg: str):
        self._log("INFO", msg)

    def warning(self, msg: str):
        self._log("WARNING", msg)

    def error(self, msg: str):
        self._log("ERROR", msg)


# SCENGEN_DEBUG=1 turns on debug output
debug_mode = os.environ.get("SCENGEN_DEBUG", "").strip().lower() in ("1", "true", "yes", "on")
logger = Logger("scengen", debug_mode)
