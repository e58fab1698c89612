"""Performs one authenticated Blogger API call per dispatch."""

import logging
from typing import Any, Callable, Dict, Optional

import httplib2
from google.oauth2.credentials import Credentials
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build

from blogger_client.config import GOOGLE_API_TIMEOUT
from blogger_client.endpoints import Endpoint
from blogger_client.exceptions import BloggerError, RequestError
from blogger_client.session import Session

logger = logging.getLogger(__name__)

logging.getLogger("google_auth_httplib2").setLevel(logging.ERROR)
logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)

ServiceBuilder = Callable[[Credentials, int], Any]


def build_blogger_service(
    credentials: Credentials, timeout: int = GOOGLE_API_TIMEOUT
):
    """Build a Blogger v3 service with timeout-enabled authorized HTTP."""
    http = httplib2.Http(timeout=timeout)
    authorized_http = AuthorizedHttp(credentials, http=http)
    return build("blogger", "v3", http=authorized_http, cache_discovery=False)


class RequestDispatcher:
    """Maps an endpoint plus params onto the discovery client.

    ``service_builder`` is called with the session's credentials for every
    dispatch; tests pass one returning a mock service.
    """

    def __init__(
        self,
        session: Session,
        service_builder: Optional[ServiceBuilder] = None,
    ):
        self.session = session
        self.service_builder = service_builder or build_blogger_service

    def dispatch(
        self,
        method: str,
        endpoint: "str | Endpoint",
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Call ``endpoint`` with ``params`` and return the response unmodified.

        Raises:
            MalformedEndpointError: If ``endpoint`` is not a known operation.
            AuthFlowError: If interactive authorization fails.
            StorageError: If the credential cannot be persisted.
            RequestError: If the remote call fails for any other reason.
        """
        resolved = Endpoint.parse(endpoint)
        params = dict(params or {})

        credentials = self.session.ensure_authenticated()

        if method.upper() != resolved.http_method:
            logger.warning(
                f"{method.upper()} does not match {resolved.value} "
                f"({resolved.http_method}), sending it as {resolved.http_method}"
            )
        logger.debug(f"{method.upper()} {resolved.value} {sorted(params)}")
        try:
            service = self.service_builder(credentials, self.session.timeout)
            resource = getattr(service, resolved.resource)()
            request = getattr(resource, resolved.action)(**params)
            return request.execute()
        except BloggerError:
            raise
        except Exception as e:
            raise RequestError(method, resolved.value, e) from e
