import os, sys, logging
from typing import Optional
from functools import partial

class Logger:
    def __init__(self, name: str, logging_enabled: bool = False,
                 log_file: Optional[str] = None):
        self._logger = logging.getLogger(name)
        self._logger.propagate = False
        # A log file on its own is enough to switch logging on
        if logging_enabled or log_file:
            if not self._has_output_handler():
                self._logger.addHandler(self._make_handler(log_file))
            self._logger.setLevel(logging.DEBUG)
        elif not self._logger.handlers:
            self._logger.addHandler(logging.NullHandler())

        # Dynamically create logging methods
        for level in ['debug', 'info', 'warning', 'error']:
            setattr(self, level, partial(self._log, level))

    def _has_output_handler(self) -> bool:
        return any(not isinstance(h, logging.NullHandler) for h in self._logger.handlers)

    def _make_handler(self, log_file: Optional[str]) -> logging.Handler:
        if log_file == "-":
            handler = logging.StreamHandler(sys.stdout)
        else:
            if not log_file:
                os.makedirs('logs', exist_ok=True)
                log_file = os.path.join('logs', 'chat_debug.log')
            handler = logging.FileHandler(log_file)
        handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))
        return handler

    def _log(self, level: str, msg: str, exc_info: Optional[bool] = None) -> None:
        getattr(self._logger, level)(msg, exc_info=exc_info)
