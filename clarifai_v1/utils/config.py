import os
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict

import yaml

from clarifai_v1.utils.constants import DEFAULT_BASE, DEFAULT_CONFIG
from clarifai_v1.utils.logging import logger


class Context(OrderedDict):
  """
  A context which has a name and a set of key-values as a dict under env.

  Keys are read as attributes, e.g. ``context.app_id``.
  """

  def __init__(self, name, **kwargs):
    self['name'] = name
    # when loading from config the env: section may already be in the yaml.
    if 'env' in kwargs:
      self['env'] = kwargs['env']
    else:
      self['env'] = kwargs

  def __getattr__(self, key):
    """Resolve ``key`` in this order: the CLARIFAI_<KEY> environment variable, CLARIFAI_<KEY> in
    the context, ``key`` in the context, then the built-in default for ``api_base``. A context
    value of "ENVVAR" means the environment variable is required.
    """
    try:
      if key == 'name':
        return self[key]
      if key == 'env':
        raise AttributeError("Don't access .env directly")

      envvar_name = 'CLARIFAI_' + key.upper()
      env = self['env']
      if envvar_name in os.environ:
        return os.environ[envvar_name]
      if envvar_name in env:
        value = env[envvar_name]
        if value == "ENVVAR":
          raise AttributeError(
              f"Environment variable '{envvar_name}' not set. Attempting to load it for config '{self['name']}'. Please set it in your terminal."
          )
        return value
      if key in env:
        return env[key]
      if envvar_name == 'CLARIFAI_API_BASE':
        return DEFAULT_BASE
      raise AttributeError(
          f"'{type(self).__name__}' object has no attribute '{key}' or '{envvar_name}' and '{envvar_name}' is also not in os.environ"
      )
    except KeyError as e:
      raise AttributeError(f"'{type(self).__name__}' object has no attribute '{key}'") from e

  def get(self, key, default=None):
    """Same lookup as attribute access, returning ``default`` when nothing is found."""
    try:
      return self.__getattr__(key)
    except AttributeError:
      return default


@dataclass
class Config:
  current_context: str
  filename: str
  contexts: Dict[str, Context] = field(default_factory=OrderedDict)

  def __post_init__(self):
    contexts = OrderedDict()
    for k, v in self.contexts.items():
      if not isinstance(v, Context):
        v = dict(v or {})
        v.pop('name', None)
        v = Context(k, **v)
      contexts[k] = v
    self.contexts = contexts

  @classmethod
  def from_yaml(cls, filename: str = DEFAULT_CONFIG):
    """Loads the configuration from a YAML file.
    If the file does not exist, it initializes with empty config.
    """
    cfg = {"current_context": "_empty_", "contexts": {"_empty_": {}}}
    if os.path.exists(filename):
      with open(filename, 'r') as f:
        cfg = yaml.safe_load(f) or cfg
    else:
      logger.debug(f"Config file {filename} not found, using environment variables only.")
    return cls(**cfg, filename=str(filename))

  @property
  def current(self) -> Context:
    """Get the current Context or an empty one if the config is not setup."""
    if not self.current_context or self.current_context not in self.contexts:
      logger.debug("No current context set, returning empty context.")
      return Context("_empty_")
    return self.contexts[self.current_context]
