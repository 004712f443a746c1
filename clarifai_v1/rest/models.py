# -*- coding: utf-8 -*-
"""
Request and response records for the v1 /info/, /tag/ and /feedback/ endpoints.

Requests are plain mutable dataclasses that know how to turn themselves into the JSON body the
API expects. Responses are frozen snapshots built from a body that has already been checked by
``clarifai_v1.schema.responses``. Field groups shared between records (status, the per-item
document fields) are composed rather than inherited.
"""
import typing  # noqa
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List

from schema import Optional, Schema, SchemaError

from clarifai_v1.errors import ValidationError
from clarifai_v1.utils.constants import STATUS_OK

TAG_REQUEST_SCHEMA = Schema({'url': [str], Optional('local_ids'): [str], Optional('model'): str})

FEEDBACK_FORM_SCHEMA = Schema({
    Optional(key): [str] for key in ('docids', 'url', 'add_tags', 'remove_tags',
                                     'dissimilar_docids', 'similar_docids', 'search_click')
})


def _list(value) -> list:
  return list(value) if value else []


def _str(value) -> str:
  return value if value is not None else ''


def _int(value) -> int:
  return value if value is not None else 0


def _check(schema: Schema, body: dict, what: str) -> None:
  try:
    schema.validate(body)
  except SchemaError as e:
    raise ValidationError('invalid %s: %s' % (what, e.code)) from e


@dataclass
class TagRequest:
  """ Body of a POST /tag/ call.

  Args:
    urls: publicly reachable urls of the images or videos to tag, at least one.
    local_ids: optional identifiers, one per url, echoed back on each result.
    model: optional name of the model to tag with; the server default when empty.
  """
  urls: List[str] = field(default_factory=list)
  local_ids: List[str] = field(default_factory=list)
  model: str = ''

  def validate(self) -> None:
    if isinstance(self.urls, str) or isinstance(self.local_ids, str):
      raise ValidationError('urls and local_ids must be lists of strings')
    if not self.urls:
      raise ValidationError('at least one url required')
    _check(TAG_REQUEST_SCHEMA, self.to_dict(), 'tag request')

  def to_dict(self) -> Dict[str, Any]:
    body = {'url': list(self.urls)}  # type: Dict[str, Any]
    if self.local_ids:
      body['local_ids'] = list(self.local_ids)
    if self.model:
      body['model'] = self.model
    return body

  @classmethod
  def from_dict(cls, body: Dict[str, Any]) -> 'TagRequest':
    return cls(
        urls=_list(body.get('url')),
        local_ids=_list(body.get('local_ids')),
        model=_str(body.get('model')))


@dataclass
class FeedbackForm:
  """ Body of a POST /feedback/ call.

  Exactly one of ``docids`` or ``urls`` identifies the items the feedback is about. The other
  lists are all optional:

    add_tags / remove_tags: tags that should or should not have been returned.
    similar_docids / dissimilar_docids: docids judged similar or dissimilar to the items.
    search_click: search terms that led to a click on the items.
  """
  docids: List[str] = field(default_factory=list)
  urls: List[str] = field(default_factory=list)
  add_tags: List[str] = field(default_factory=list)
  remove_tags: List[str] = field(default_factory=list)
  dissimilar_docids: List[str] = field(default_factory=list)
  similar_docids: List[str] = field(default_factory=list)
  search_click: List[str] = field(default_factory=list)

  # dataclass attribute name -> JSON field name
  _wire_names = (
      ('docids', 'docids'),
      ('urls', 'url'),
      ('add_tags', 'add_tags'),
      ('remove_tags', 'remove_tags'),
      ('dissimilar_docids', 'dissimilar_docids'),
      ('similar_docids', 'similar_docids'),
      ('search_click', 'search_click'),
  )

  def validate(self) -> None:
    if any(isinstance(getattr(self, attr), str) for attr, _ in self._wire_names):
      raise ValidationError('feedback fields must be lists of strings')
    if not self.docids and not self.urls:
      raise ValidationError('Requires at least one docid or url')
    if self.docids and self.urls:
      raise ValidationError(
          "Request must provide exactly one of the following fields: {'docids', 'urls'}")
    _check(FEEDBACK_FORM_SCHEMA, self.to_dict(), 'feedback form')

  def to_dict(self) -> Dict[str, Any]:
    body = {}
    for attr, wire in self._wire_names:
      value = getattr(self, attr)
      if value:
        body[wire] = list(value)
    return body

  @classmethod
  def from_dict(cls, body: Dict[str, Any]) -> 'FeedbackForm':
    return cls(**{attr: _list(body.get(wire)) for attr, wire in cls._wire_names})


@dataclass(frozen=True)
class Status:
  code: str = ''
  message: str = ''

  @property
  def ok(self) -> bool:
    return self.code == STATUS_OK

  @classmethod
  def from_dict(cls, body: Dict[str, Any]) -> 'Status':
    return cls(code=_str(body.get('status_code')), message=_str(body.get('status_msg')))


@dataclass(frozen=True)
class InfoResults:
  """ Limits and defaults of the service, as reported by GET /info/. """
  max_image_size: int = 0
  default_language: str = ''
  max_video_size: int = 0
  max_image_bytes: int = 0
  default_model: str = ''
  max_video_bytes: int = 0
  max_video_duration: int = 0
  max_video_batch_size: int = 0
  min_video_size: int = 0
  min_image_size: int = 0
  max_batch_size: int = 0
  api_version: Decimal = Decimal(0)

  @classmethod
  def from_dict(cls, body: Dict[str, Any]) -> 'InfoResults':
    api_version = body.get('api_version')
    return cls(
        max_image_size=_int(body.get('max_image_size')),
        default_language=_str(body.get('default_language')),
        max_video_size=_int(body.get('max_video_size')),
        max_image_bytes=_int(body.get('max_image_bytes')),
        default_model=_str(body.get('default_model')),
        max_video_bytes=_int(body.get('max_video_bytes')),
        max_video_duration=_int(body.get('max_video_duration')),
        max_video_batch_size=_int(body.get('max_video_batch_size')),
        min_video_size=_int(body.get('min_video_size')),
        min_image_size=_int(body.get('min_image_size')),
        max_batch_size=_int(body.get('max_batch_size')),
        api_version=Decimal(api_version) if api_version is not None else Decimal(0))


@dataclass(frozen=True)
class InfoResponse:
  status: Status
  results: InfoResults

  @classmethod
  def from_dict(cls, body: Dict[str, Any]) -> 'InfoResponse':
    return cls(
        status=Status.from_dict(body), results=InfoResults.from_dict(body.get('results') or {}))


@dataclass(frozen=True)
class TagMeta:
  timestamp: typing.Optional[Decimal] = None
  model: str = ''
  config: str = ''

  @classmethod
  def from_dict(cls, body: Dict[str, Any]) -> 'TagMeta':
    tag = body.get('tag') or {}
    return cls(
        timestamp=tag.get('timestamp'),
        model=_str(tag.get('model')),
        config=_str(tag.get('config')))


@dataclass(frozen=True)
class TagItem:
  """ Fields every tag result carries, whatever the media type.

  ``docid`` is the server's document id. It does not fit in 64 bits, so it is kept as a Python
  int; ``docid_str`` is the same id as the server formats it.
  """
  docid: typing.Optional[int] = None
  docid_str: str = ''
  url: str = ''
  status: Status = field(default_factory=Status)
  local_id: str = ''

  @classmethod
  def from_dict(cls, body: Dict[str, Any]) -> 'TagItem':
    return cls(
        docid=body.get('docid'),
        docid_str=_str(body.get('docid_str')),
        url=_str(body.get('url')),
        status=Status.from_dict(body),
        local_id=_str(body.get('local_id')))


@dataclass(frozen=True)
class ImageTag:
  classes: List[str] = field(default_factory=list)
  catids: List[str] = field(default_factory=list)
  probs: List[float] = field(default_factory=list)

  @classmethod
  def from_dict(cls, body: Dict[str, Any]) -> 'ImageTag':
    return cls(
        classes=_list(body.get('classes')),
        catids=_list(body.get('catids')),
        probs=[float(p) for p in _list(body.get('probs'))])


@dataclass(frozen=True)
class VideoTag:
  """ Tags of a video, one inner list per segment. """
  classes: List[List[str]] = field(default_factory=list)
  catids: List[List[str]] = field(default_factory=list)
  probs: List[List[float]] = field(default_factory=list)

  @classmethod
  def from_dict(cls, body: Dict[str, Any]) -> 'VideoTag':
    return cls(
        classes=[_list(segment) for segment in _list(body.get('classes'))],
        catids=[_list(segment) for segment in _list(body.get('catids'))],
        probs=[[float(p) for p in _list(segment)] for segment in _list(body.get('probs'))])


def _result_tag(body: Dict[str, Any]) -> Dict[str, Any]:
  return (body.get('result') or {}).get('tag') or {}


@dataclass(frozen=True)
class ImageTagResult:
  item: TagItem
  tag: ImageTag

  @classmethod
  def from_dict(cls, body: Dict[str, Any]) -> 'ImageTagResult':
    return cls(item=TagItem.from_dict(body), tag=ImageTag.from_dict(_result_tag(body)))


@dataclass(frozen=True)
class VideoTagResult:
  item: TagItem
  tag: VideoTag

  @classmethod
  def from_dict(cls, body: Dict[str, Any]) -> 'VideoTagResult':
    return cls(item=TagItem.from_dict(body), tag=VideoTag.from_dict(_result_tag(body)))


@dataclass(frozen=True)
class ImageTagResponse:
  status: Status
  meta: TagMeta
  results: List[ImageTagResult]

  @classmethod
  def from_dict(cls, body: Dict[str, Any]) -> 'ImageTagResponse':
    return cls(
        status=Status.from_dict(body),
        meta=TagMeta.from_dict(body.get('meta') or {}),
        results=[ImageTagResult.from_dict(r or {}) for r in _list(body.get('results'))])


@dataclass(frozen=True)
class VideoTagResponse:
  status: Status
  meta: TagMeta
  results: List[VideoTagResult]

  @classmethod
  def from_dict(cls, body: Dict[str, Any]) -> 'VideoTagResponse':
    return cls(
        status=Status.from_dict(body),
        meta=TagMeta.from_dict(body.get('meta') or {}),
        results=[VideoTagResult.from_dict(r or {}) for r in _list(body.get('results'))])


@dataclass(frozen=True)
class FeedbackResponse:
  status: Status

  @classmethod
  def from_dict(cls, body: Dict[str, Any]) -> 'FeedbackResponse':
    return cls(status=Status.from_dict(body))
