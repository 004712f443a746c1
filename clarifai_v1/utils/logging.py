import datetime
import json
import logging
import os
import socket
import sys
import traceback
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

# The default logger to use throughout the client is defined at bottom of this file.

JSON_LOG_KEY = 'msg'
JSON_DEFAULT_CHAR_LENGTH = 400
FIELD_BLACKLIST = [
    'msg', 'message', 'account', 'levelno', 'created', 'threadName', 'name', 'processName',
    'module', 'funcName', 'msecs', 'relativeCreated', 'pathname', 'args', 'thread', 'process',
    'taskName'
]


def _get_library_name() -> str:
  return __name__.split(".")[0]


def _use_json_logger() -> bool:
  # If ENABLE_JSON_LOGGER is 'true' then definitely use json logger.
  # If ENABLE_JSON_LOGGER is 'false' then definitely don't use json logger.
  # If ENABLE_JSON_LOGGER is not set, then use json logger if in k8s.
  enabled_json = os.getenv('ENABLE_JSON_LOGGER', None)
  in_k8s = 'KUBERNETES_SERVICE_HOST' in os.environ
  return enabled_json == 'true' or (in_k8s and enabled_json != 'false')


def _configure_logger(name: str, logger_level: Union[int, str] = logging.NOTSET) -> None:
  """Configure the logger with the specified name."""

  logger = logging.getLogger(name)
  logger.setLevel(logger_level)

  # Remove existing handlers
  for handler in logger.handlers[:]:
    logger.removeHandler(handler)

  if _use_json_logger():
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
  else:
    handler = RichHandler(
        rich_tracebacks=True, log_time_format="%Y-%m-%d %H:%M:%S", console=Console(width=255))
    handler.setFormatter(logging.Formatter('%(name)s:  %(message)s'))
  logger.addHandler(handler)


def get_logger(logger_level: Union[int, str] = logging.NOTSET,
               name: Optional[str] = None) -> logging.Logger:
  """Return a logger with the specified name."""

  if name is None:
    name = _get_library_name()

  _configure_logger(name, logger_level)
  return logging.getLogger(name)


def _default_json_default(obj):
  """
  Handle objects that could not be serialized to JSON automatically.

  Times are output as ISO8601, everything else is coerced to a (truncated) string.
  """
  if isinstance(obj, (datetime.datetime, datetime.date, datetime.time)):
    return obj.isoformat()
  objstr = str(obj)
  if len(objstr) > JSON_DEFAULT_CHAR_LENGTH:
    type_name = type(obj).__name__
    objstr = f"{objstr[:JSON_DEFAULT_CHAR_LENGTH]}...[{type_name} was truncated, len={len(objstr)} chars]"
  return objstr


class JsonFormatter(logging.Formatter):
  """Formats each record as a single JSON object per line."""

  def __init__(self, fmt=None, datefmt=None, style='%', json_default=_default_json_default):
    """
    :param fmt: Config as a JSON string, allowed fields;
           extra: provide extra fields always present in logs
           source_host: override source host name
    :param datefmt: Date format to use (required by logging.Formatter
        interface but not used)
    :param json_default: Default JSON representation for unknown types,
                         by default coerce everything to a string
    """
    self._fmt = json.loads(fmt) if fmt is not None else {}
    self.json_default = json_default
    self.defaults = self._fmt.get('extra', {})
    if 'source_host' in self._fmt:
      self.source_host = self._fmt['source_host']
    else:
      try:
        self.source_host = socket.gethostname()
      except OSError:
        self.source_host = ""

  def format(self, record):
    fields = record.__dict__.copy()

    # logger.info({...}) directly.
    if isinstance(record.msg, dict):
      fields.update(record.msg)
      fields.pop('msg')
      msg = ""
    else:
      msg = record.getMessage()
    for k in FIELD_BLACKLIST:
      fields.pop(k, None)
    level = fields.pop('levelname', None)
    if level:
      fields['level'] = level.lower()

    exc_info = fields.pop('exc_info', None)
    if exc_info:
      fields['exception'] = traceback.format_exception(*exc_info)
    if not fields.get('exc_text'):
      fields.pop('exc_text', None)

    logr = dict(self.defaults)
    logr.update({
        JSON_LOG_KEY: msg,
        '@timestamp': datetime.datetime.utcnow().strftime('%Y-%m-%dT%H:%M:%S.%fZ'),
        'source_host': self.source_host,
    })
    logr.update(fields)

    try:
      return json.dumps(logr, default=self.json_default)
    except (TypeError, ValueError):
      exc_type, value, tb = sys.exc_info()
      return json.dumps(
          {
              "msg": f"Fail to format log {exc_type.__name__}({value}), {logr}",
              "formatting_traceback": "\n".join(traceback.format_tb(tb)),
          },
          default=self.json_default)


# the default logger for the client.
logger = get_logger(logger_level=os.environ.get("LOG_LEVEL", "INFO"), name="clarifai_v1")
