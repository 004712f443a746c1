# -*- coding: utf-8 -*-
"""
Clarifai v1 API Python Client
"""
import dataclasses
import json
import typing  # noqa
from decimal import Decimal

from schema import Schema, SchemaError

from clarifai_v1.errors import DecodeError
from clarifai_v1.rest.models import (FeedbackForm, FeedbackResponse, ImageTagResponse,
                                     InfoResponse, TagRequest, VideoTagResponse)
from clarifai_v1.rest.transport import HttpTransport
from clarifai_v1.schema.responses import (FEEDBACK_RESPONSE_SCHEMA, IMAGE_TAG_RESPONSE_SCHEMA,
                                          INFO_RESPONSE_SCHEMA, VIDEO_TAG_RESPONSE_SCHEMA,
                                          fold_keys)
from clarifai_v1.utils.config import Config
from clarifai_v1.utils.logging import logger


class ClarifaiApi(object):
  """
  The constructor for API access. You must sign up at developer.clarifai.com first and create an
  application in order to generate your credentials for API access.

  Every method makes exactly one request and returns the decoded response. A ``status_code``
  other than "OK" in the body is not raised; check ``response.status`` yourself.

  Args:
    app_id: the client_id for an application you've created in your Clarifai account.
    app_secret: the client_secret for the same application.
    base_url: base URL of the API endpoints.
    model: default model for tag requests that do not name one.
    access_token: use this token instead of exchanging app_id/app_secret for one.
    transport: anything with a ``send(payload, endpoint, method)`` method returning the raw
        body; credentials, base_url and the config are not used when this is given.
    config: configuration to read missing credentials from; defaults to the config file.

  Example:
    from clarifai_v1.rest import ClarifaiApi, TagRequest
    clarifai_api = ClarifaiApi()
    res = clarifai_api.tag_images(TagRequest(urls=['https://samples.clarifai.com/metro-north.jpg']))
    print(res.results[0].tag.classes)
  """

  def __init__(
      self,  # type: ClarifaiApi
      app_id=None,  # type: typing.Optional[str]
      app_secret=None,  # type: typing.Optional[str]
      base_url=None,  # type: typing.Optional[str]
      model=None,  # type: typing.Optional[str]
      access_token=None,  # type: typing.Optional[str]
      transport=None,  # type: typing.Optional[HttpTransport]
      config=None  # type: typing.Optional[Config]
  ):
    # type: (...) -> None
    if transport is None:
      context = (config if config is not None else Config.from_yaml()).current
      model = model or context.get('model')
      transport = HttpTransport(
          app_id=app_id or context.get('app_id'),
          app_secret=app_secret or context.get('app_secret'),
          base_url=base_url or context.api_base,
          access_token=access_token or context.get('access_token'))
    self.transport = transport
    self.model = model or ''

  def set_model(self, model):  # type: (typing.Optional[str]) -> None
    self.model = model or ''

  def get_info(self):  # type: () -> InfoResponse
    """ Get various information about the current state of the API.

    This provides general information such as the API version number, but also the limits that
    apply to your account, such as the maximum batch size and image dimensions.
    """
    raw = self.transport.send(None, 'info', 'GET')
    return InfoResponse.from_dict(self._decode('info', raw, INFO_RESPONSE_SCHEMA))

  def tag_images(self, request):  # type: (TagRequest) -> ImageTagResponse
    """ Tag one or more images given by url.

    Args:
      request: a TagRequest with at least one url.

    Returns:
      an ImageTagResponse with one result per url, each carrying flat lists of classes,
      catids and probs.

    Raises:
      ValidationError: the request has no urls. Nothing is sent.
    """
    body = self._tag_body(request)
    raw = self.transport.send(body, 'tag', 'POST')
    return ImageTagResponse.from_dict(self._decode('tag', raw, IMAGE_TAG_RESPONSE_SCHEMA))

  tag = tag_images

  def tag_videos(self, request):  # type: (TagRequest) -> VideoTagResponse
    """ Tag one or more videos given by url.

    This goes to the same /tag/ endpoint as images; only the response is read differently, with
    one list of classes, catids and probs per video segment.

    Raises:
      ValidationError: the request has no urls. Nothing is sent.
    """
    body = self._tag_body(request)
    raw = self.transport.send(body, 'tag', 'POST')
    return VideoTagResponse.from_dict(self._decode('tag', raw, VIDEO_TAG_RESPONSE_SCHEMA))

  def feedback(self, form):  # type: (FeedbackForm) -> FeedbackResponse
    """ Give contextual feedback on earlier results in order to improve them.

    Args:
      form: a FeedbackForm naming the items by exactly one of docids or urls.

    Example:
      clarifai_api.feedback(FeedbackForm(urls=['https://samples.clarifai.com/metro-north.jpg'],
                                         add_tags=['train', 'station'],
                                         remove_tags=['fish']))

    Raises:
      ValidationError: neither or both of docids and urls were given. Nothing is sent.
    """
    form.validate()
    raw = self.transport.send(form.to_dict(), 'feedback', 'POST')
    return FeedbackResponse.from_dict(self._decode('feedback', raw, FEEDBACK_RESPONSE_SCHEMA))

  def _tag_body(self, request):  # type: (TagRequest) -> dict
    if not request.model and self.model:
      request = dataclasses.replace(request, model=self.model)
    request.validate()
    return request.to_dict()

  def _decode(self, resource, raw, schema):  # type: (str, bytes, Schema) -> dict
    """ Parse a response body and check it against the expected shape. """
    try:
      body = json.loads(raw, parse_float=Decimal)
    except (TypeError, ValueError) as e:
      raise DecodeError(resource, raw, 'invalid JSON: %s' % e) from e
    if body is None:
      body = {}
    try:
      body = schema.validate(fold_keys(body))
    except SchemaError as e:
      raise DecodeError(resource, raw, e.code) from e
    logger.debug("%s response status: %s", resource, body.get('status_code'))
    return body
