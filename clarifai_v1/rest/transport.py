# -*- coding: utf-8 -*-
"""
HTTP transport for the v1 API: authentication, sessions and status handling.

The binding layer in ``clarifai_v1.rest.client`` only needs an object with a
``send(payload, endpoint, method, retry=False) -> bytes`` method; ``HttpTransport`` is the
default one.
"""
import json
import threading
import typing  # noqa
from posixpath import join as urljoin

import requests

from clarifai_v1.errors import ApiThrottledError, TokenError, TransportError
from clarifai_v1.utils.constants import (API_VERSION, CONNECTIONS, DEFAULT_BASE,
                                         DEFAULT_THROTTLE_WAIT_SECONDS, DEFAULT_TIMEOUT, RETRIES)
from clarifai_v1.utils.logging import logger
from clarifai_v1.versions import USER_AGENT


class HttpTransport(object):
  """ Sends JSON requests to the v1 API and returns the raw response bodies.

  Args:
    app_id: the client_id of an application created in your Clarifai account.
    app_secret: the client_secret for the same application.
    base_url: base URL of the API endpoints, with or without the scheme.
    access_token: an existing access token; when given no token exchange is made until the
        server rejects it.
    timeout: seconds to wait for each HTTP request.
    session: a requests.Session to use instead of a new pooled one.
  """

  def __init__(
      self,  # type: HttpTransport
      app_id=None,  # type: typing.Optional[str]
      app_secret=None,  # type: typing.Optional[str]
      base_url=DEFAULT_BASE,  # type: str
      access_token=None,  # type: typing.Optional[str]
      timeout=DEFAULT_TIMEOUT,  # type: float
      session=None  # type: typing.Optional[requests.Session]
  ):
    # type: (...) -> None
    self.app_id = app_id
    self.app_secret = app_secret
    if '://' not in base_url:
      base_url = 'https://' + base_url
    self.base_url = base_url.rstrip('/')
    self.access_token = access_token
    self.timeout = timeout
    self.throttled = False
    # guards access_token and throttled
    self._lock = threading.Lock()
    self.session = session if session is not None else self._make_requests_session()
    logger.debug("Base url: %s", self.base_url)

  def _make_requests_session(self):  # type: () -> requests.Session
    http_adapter = requests.adapters.HTTPAdapter(
        max_retries=RETRIES, pool_connections=CONNECTIONS, pool_maxsize=CONNECTIONS)

    session = requests.Session()
    session.mount('http://', http_adapter)
    session.mount('https://', http_adapter)
    session.headers['User-Agent'] = USER_AGENT
    return session

  def url_for(self, endpoint):  # type: (str) -> str
    return urljoin(self.base_url, API_VERSION, endpoint) + '/'

  def set_access_token(self, token):  # type: (str) -> None
    with self._lock:
      self.access_token = token

  def get_access_token(self, renew=False):  # type: (bool) -> str
    """ Get an access token using the app_id and app_secret.

    There is no need to call this yourself: a token is fetched on the first request and renewed
    when the server reports it expired.

    Args:
      renew: if True, then force a new token even if one is already held.
    """
    with self._lock:
      if self.access_token is not None and not renew:
        return self.access_token
      return self._request_access_token()

  def _renew_access_token(self, rejected):  # type: (str) -> str
    """ Replace a token the server rejected, unless another request already replaced it. """
    with self._lock:
      if self.access_token is not None and self.access_token != rejected:
        return self.access_token
      return self._request_access_token()

  def _request_access_token(self):  # type: () -> str
    if not self.app_id or not self.app_secret:
      raise TokenError('token', 'POST', reason='app_id and app_secret are required to get a token')

    url = self.url_for('token')
    data = {
        'grant_type': 'client_credentials',
        'client_id': self.app_id,
        'client_secret': self.app_secret
    }
    try:
      res = self.session.post(url, data=data, timeout=self.timeout)
    except requests.RequestException as e:
      raise TokenError('token', 'POST', reason=str(e)) from e

    if res.status_code != 200:
      raise TokenError('token', 'POST', status_code=res.status_code, body=res.content)
    try:
      token = res.json()['access_token']
    except (ValueError, KeyError, TypeError) as e:
      raise TokenError(
          'token', 'POST', status_code=res.status_code, body=res.content,
          reason='no access_token in response') from e

    self.access_token = token
    return token

  def send(self, payload, endpoint, method, retry=False):
    # type: (typing.Optional[dict], str, str, bool) -> bytes
    """ Send one request and return the raw response body.

    Args:
      payload: a JSON serializable body, or None to send no body.
      endpoint: name of the endpoint, e.g. "tag".
      method: the HTTP verb.
      retry: True when this call is the resend after renewing an expired token.

    Raises:
      TokenError: no token could be obtained, or it was rejected after renewal.
      ApiThrottledError: the server answered 429.
      TransportError: the request failed or returned any other non-success status.
    """
    url = self.url_for(endpoint)
    token = self.get_access_token()
    headers = {'Authorization': 'Bearer %s' % token}
    data = None
    if payload is not None:
      headers['Content-Type'] = 'application/json'
      data = json.dumps(payload)

    logger.debug("%s %s", method, url)
    try:
      res = self.session.request(method, url, data=data, headers=headers, timeout=self.timeout)
    except requests.RequestException as e:
      raise TransportError(endpoint, method, reason=str(e)) from e

    if res.status_code in (200, 201):
      with self._lock:
        self.throttled = False
      return res.content

    if res.status_code == 401:
      if retry:
        raise TokenError(endpoint, method, status_code=401, body=res.content,
                         reason='access token rejected after renewal')
      logger.info('Getting new access token.')
      self._renew_access_token(token)
      return self.send(payload, endpoint, method, retry=True)

    if res.status_code == 429:
      with self._lock:
        self.throttled = True
      wait_secs = res.headers.get('X-Throttle-Wait-Seconds', DEFAULT_THROTTLE_WAIT_SECONDS)
      try:
        wait_secs = int(wait_secs)
      except ValueError:
        wait_secs = DEFAULT_THROTTLE_WAIT_SECONDS
      logger.warning('Throttled on %s. Retry after %d seconds.', endpoint, wait_secs)
      raise ApiThrottledError(endpoint, method, wait_secs, body=res.content)

    raise TransportError(endpoint, method, status_code=res.status_code, body=res.content)
