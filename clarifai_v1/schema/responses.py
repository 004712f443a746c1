"""Shapes of the JSON bodies returned by the v1 REST endpoints.

Response bodies are validated against these schemas before they are turned into
``clarifai_v1.rest.models`` records. The rules follow how the API's own clients read
these documents:

- field names match case-insensitively (``Results`` and ``results`` are the same field),
- any field may be missing or ``null``,
- unknown fields are dropped,
- a value of the wrong type is an error.

Floating point numbers must be parsed as ``decimal.Decimal`` (``json.loads(...,
parse_float=Decimal)``) so that timestamps and the API version keep every digit.
"""
from decimal import Decimal

from schema import And, Optional, Or, Regex, Schema, Use


def _not_bool(value) -> bool:
  return not isinstance(value, bool)


_STR = Or(None, str)
_INT = Or(None, And(int, _not_bool))
_REAL = Or(Decimal, And(int, _not_bool))
# A JSON number literal, as accepted inside a string by json.Number.
JSON_NUMBER_RE = r'^-?(0|[1-9][0-9]*)(\.[0-9]+)?([eE][+-]?[0-9]+)?\Z'

# json.Number: a number, or a string holding one.
_NUMBER = Or(None, Decimal, And(int, _not_bool, Use(Decimal)),
             And(str, Regex(JSON_NUMBER_RE), Use(Decimal)))


def _status_fields():
  return {Optional('status_code'): _STR, Optional('status_msg'): _STR}


def _tag_item_fields():
  fields = _status_fields()
  fields.update({
      Optional('docid'): _INT,
      Optional('docid_str'): _STR,
      Optional('url'): _STR,
      Optional('local_id'): _STR,
  })
  return fields


def _nested(item_schema):
  """A list of per-segment lists, where a segment list may itself be null."""
  return Or(None, [Or(None, [item_schema])])


INFO_RESULTS_SCHEMA = Schema(
    {
        Optional('max_image_size'): _INT,
        Optional('default_language'): _STR,
        Optional('max_video_size'): _INT,
        Optional('max_image_bytes'): _INT,
        Optional('default_model'): _STR,
        Optional('max_video_bytes'): _INT,
        Optional('max_video_duration'): _INT,
        Optional('max_video_batch_size'): _INT,
        Optional('min_video_size'): _INT,
        Optional('min_image_size'): _INT,
        Optional('max_batch_size'): _INT,
        Optional('api_version'): Or(None, _REAL),
    },
    name='results',
    ignore_extra_keys=True)


def _info_response_schema():
  fields = _status_fields()
  fields[Optional('results')] = Or(None, INFO_RESULTS_SCHEMA)
  return Schema(fields, name='InfoResponse', ignore_extra_keys=True)


INFO_RESPONSE_SCHEMA = _info_response_schema()

TAG_META_SCHEMA = Schema(
    {
        Optional('tag'):
            Or(None,
               Schema({
                   Optional('timestamp'): _NUMBER,
                   Optional('model'): _STR,
                   Optional('config'): _STR,
               },
                      ignore_extra_keys=True)),
    },
    name='meta',
    ignore_extra_keys=True)

IMAGE_TAG_SCHEMA = Schema(
    {
        Optional('classes'): Or(None, [str]),
        Optional('catids'): Or(None, [str]),
        Optional('probs'): Or(None, [_REAL]),
    },
    name='tag',
    ignore_extra_keys=True)

VIDEO_TAG_SCHEMA = Schema(
    {
        Optional('classes'): _nested(str),
        Optional('catids'): _nested(str),
        Optional('probs'): _nested(_REAL),
    },
    name='tag',
    ignore_extra_keys=True)


def _tag_result_schema(tag_schema):
  fields = _tag_item_fields()
  fields[Optional('result')] = Or(
      None, Schema({Optional('tag'): Or(None, tag_schema)}, ignore_extra_keys=True))
  return Schema(fields, ignore_extra_keys=True)


def _tag_response_schema(tag_schema, name):
  fields = _status_fields()
  fields[Optional('meta')] = Or(None, TAG_META_SCHEMA)
  fields[Optional('results')] = Or(None, [Or(None, _tag_result_schema(tag_schema))])
  return Schema(fields, name=name, ignore_extra_keys=True)


IMAGE_TAG_RESPONSE_SCHEMA = _tag_response_schema(IMAGE_TAG_SCHEMA, 'ImageTagResponse')
VIDEO_TAG_RESPONSE_SCHEMA = _tag_response_schema(VIDEO_TAG_SCHEMA, 'VideoTagResponse')

FEEDBACK_RESPONSE_SCHEMA = Schema(
    _status_fields(), name='FeedbackResponse', ignore_extra_keys=True)


def fold_keys(data):
  """Lower-case every object key, recursively. When several spellings of the same name are
  present the last one in the document wins."""
  if isinstance(data, list):
    return [fold_keys(item) for item in data]
  if not isinstance(data, dict):
    return data
  folded = {}
  for key, value in data.items():
    folded[key.lower()] = fold_keys(value)
  return folded
