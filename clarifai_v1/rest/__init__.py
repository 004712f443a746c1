# -*- coding: utf-8 -*-

from clarifai_v1.errors import (ApiThrottledError, DecodeError, TokenError, TransportError,
                                ValidationError)
from clarifai_v1.rest.client import ClarifaiApi
from clarifai_v1.rest.models import (FeedbackForm, FeedbackResponse, ImageTag, ImageTagResponse,
                                     ImageTagResult, InfoResponse, InfoResults, Status, TagItem,
                                     TagMeta, TagRequest, VideoTag, VideoTagResponse,
                                     VideoTagResult)
from clarifai_v1.rest.transport import HttpTransport

# So autoflake doesn't remove imports.
_ = ApiThrottledError
_ = DecodeError
_ = TokenError
_ = TransportError
_ = ValidationError
