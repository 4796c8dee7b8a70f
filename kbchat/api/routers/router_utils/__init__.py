"""
Router utility functions.

Contains helper functions extracted from router endpoints to keep them clean.
"""

from kbchat.api.routers.router_utils.response_utils import error_response
from kbchat.api.routers.router_utils.stream_utils import SSE_HEADERS, stream_with_sentinel
from kbchat.api.routers.router_utils.upload_utils import clean_filename

__all__ = [
    "SSE_HEADERS",
    "clean_filename",
    "error_response",
    "stream_with_sentinel",
]
