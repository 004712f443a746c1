# -*- coding: utf-8 -*-
import time
import typing  # noqa

from clarifai_v1.versions import CLIENT_VERSION, OS_VER, PYTHON_VERSION

# Keep error messages readable when the server sends back an HTML page.
BODY_CHAR_LENGTH = 400


class ValidationError(Exception):
  """ A request failed a precondition check and was never sent """


class TransportError(Exception):
  """ API transport error

  Raised when the request could not be delivered or the server answered with a non-success HTTP
  status. The JSON ``status_code`` inside a 200 response is not a transport error.
  """

  def __init__(self,
               resource: str,
               method: str,
               status_code: typing.Optional[int] = None,
               body: typing.Optional[bytes] = None,
               reason: str = '') -> None:
    self.resource = resource
    self.method = method
    self.status_code = status_code
    self.body = body
    self.reason = reason

    current_ts_str = str(time.time())

    msg = """%(method)s %(resource)s FAILED(%(time_ts)s).  status_code: %(status_code)s, reason: %(reason)s
 >> Python client %(client_version)s with Python %(python_version)s on %(os_version)s
 >> RESPONSE(%(time_ts)s) %(response)s""" % {
        'method': method,
        'resource': resource,
        'status_code': status_code if status_code is not None else 'N/A',
        'reason': reason or 'N/A',
        'response': _body_preview(body),
        'time_ts': current_ts_str,
        'client_version': CLIENT_VERSION,
        'python_version': PYTHON_VERSION,
        'os_version': OS_VER
    }

    super(TransportError, self).__init__(msg)


class TokenError(TransportError):
  """ The access token could not be obtained or was rejected after renewal """


class ApiThrottledError(TransportError):
  """This is raised when the usage throttle is hit. Client should wait for wait_seconds before retrying."""

  def __init__(self, resource: str, method: str, wait_seconds: int,
               body: typing.Optional[bytes] = None) -> None:
    self.wait_seconds = wait_seconds
    super(ApiThrottledError, self).__init__(
        resource,
        method,
        status_code=429,
        body=body,
        reason='throttled, wait for %d seconds before retrying' % wait_seconds)


class DecodeError(Exception):
  """ The response body is not JSON or does not have the expected shape """

  def __init__(self, resource: str, body: typing.Optional[bytes], reason: str) -> None:
    self.resource = resource
    self.body = body
    self.reason = reason
    super(DecodeError, self).__init__('Could not decode %s response: %s\n >> RESPONSE %s' %
                                      (resource, reason, _body_preview(body)))


def _body_preview(body: typing.Optional[bytes]) -> str:
  if body is None:
    return 'N/A'
  if isinstance(body, bytes):
    body = body.decode('utf-8', errors='replace')
  if len(body) > BODY_CHAR_LENGTH:
    return '%s...[truncated, len=%d chars]' % (body[:BODY_CHAR_LENGTH], len(body))
  return body
