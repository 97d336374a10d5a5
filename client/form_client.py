"""
HTTP client that submits encoded structs as form parameters.
"""
import logging
from typing import Any, Optional, Tuple

import requests

import config
from formencoder.form_encoder import Encoder
from utils.retry import retry_with_backoff

logger = logging.getLogger(__name__)


class FormClient:
    """Sends struct values to a service as form bodies or query strings."""

    def __init__(
        self,
        base_url: str = config.BASE_URL,
        encoder: Optional[Encoder] = None,
        timeout: Tuple[float, float] = (config.CONNECT_TIMEOUT, config.READ_TIMEOUT),
        session: Optional[requests.Session] = None
    ):
        """
        Initialize form client.

        Args:
            base_url: Base URL of the target service
            encoder: Encoder used to flatten request values
            timeout: Tuple of (connect timeout, read timeout) in seconds
            session: Session to reuse, a new one is created when omitted
        """
        self.base_url = base_url.rstrip('/')
        self.encoder = encoder or Encoder.default()
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'Accept': 'application/json',
            'User-Agent': config.USER_AGENT
        })

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    @retry_with_backoff()
    def _send(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Send a retry-enabled request.

        Raises:
            requests.exceptions.RequestException: On request failure
        """
        url = self._url(endpoint)
        response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        response.raise_for_status()
        return response

    def post_form(self, endpoint: str, obj: Any) -> requests.Response:
        """
        POST ``obj`` as an application/x-www-form-urlencoded body.

        Args:
            endpoint: Endpoint relative to base_url
            obj: Struct value or dataclass instance to encode

        Returns:
            The successful response

        Raises:
            EncodeError: If ``obj`` cannot be encoded; nothing is sent
            requests.exceptions.RequestException: On request failure
        """
        pairs = self.encoder.encode(obj)
        logger.debug(f"POST {endpoint} with {len(pairs)} form fields")
        return self._send("POST", endpoint, data=[tuple(kv) for kv in pairs])

    def get_with_params(self, endpoint: str, obj: Any) -> requests.Response:
        """
        GET ``endpoint`` with ``obj`` encoded into the query string.

        Args:
            endpoint: Endpoint relative to base_url
            obj: Struct value or dataclass instance to encode

        Returns:
            The successful response
        """
        pairs = self.encoder.encode(obj)
        logger.debug(f"GET {endpoint} with {len(pairs)} query parameters")
        return self._send("GET", endpoint, params=[tuple(kv) for kv in pairs])
