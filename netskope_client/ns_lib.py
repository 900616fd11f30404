"""
Netskope API library for bulk user deprovisioning.
Provides a class-based interface for the Netskope REST user search API and the SCIM Users API.
https://docs.netskope.com/en/rest-api-v2-overview-312207.html
"""

import logging
import requests
from .ns_lib_errors import InputFileError, NetskopeError, SearchError
from .ns_lib_users import Users

DEFAULT_TIMEOUT = 30


class netskope_client:
    """Netskope API client for user lookup and SCIM deletion."""

    def __init__(self, tenant_fqdn, api_token, verbose=False, timeout=DEFAULT_TIMEOUT):
        """
        Initialize the Netskope client.

        Args:
            tenant_fqdn (str): Tenant host name (e.g., example.goskope.com)
            api_token (str): REST API v2 token, sent as a bearer credential
            verbose (bool): Trace every request at DEBUG level
            timeout (float): Seconds before any single request is abandoned
        """
        if not tenant_fqdn:
            raise ValueError("tenant_fqdn is required")
        tenant_fqdn = tenant_fqdn.strip().rstrip('/')
        for scheme in ('https://', 'http://'):
            if tenant_fqdn.startswith(scheme):
                tenant_fqdn = tenant_fqdn[len(scheme):]
        self.tenant_fqdn = tenant_fqdn
        self.server_url = f"https://{tenant_fqdn}"
        self.headers = {
            'accept': 'application/json',
            'Authorization': f"Bearer {api_token}",
        }
        self.verbose = verbose
        self.timeout = timeout
        self.last_error = None
        self.last_status_code = None
        self.logger = logging.getLogger(__name__)

        self.Users = Users(self)

    def __api_call__(self, url, method="GET", headers=None, params=None, json=None):
        """
        Issue one request and return the response when it is 2xx-class.

        Returns:
            Response: the successful response, or None on a non-2xx status,
            a timeout, or a connection error (the reason is logged)
        """
        self.__verbose_print__(f"{method} {url} - {json}")
        if headers is None:
            headers = self.headers
        try:
            response = requests.request(
                method, url, headers=headers, params=params, json=json, timeout=self.timeout
            )
        except requests.RequestException as e:
            self.logger.error(f"{method} {url} - {e}")
            self.last_error = str(e)
            self.last_status_code = None
            return None

        if 200 <= response.status_code < 300:
            self.last_error = None
            self.last_status_code = response.status_code
            return response
        self.logger.warning(f"{method} {url} - {response.status_code} - {response.text}")
        self.last_error = f"HTTP {response.status_code}"
        self.last_status_code = response.status_code
        return None

    def __api_search__(self, url, body, headers=None):
        """
        POST one search page and return its decoded JSON body.

        Raises:
            SearchError: when the request fails or the body is not a JSON object
        """
        response = self.__api_call__(url, method="POST", headers=headers, json=body)
        if response is None:
            raise SearchError(f"User search failed: {self.last_error}")
        try:
            data = response.json()
        except ValueError as e:
            raise SearchError(f"User search returned malformed JSON: {e}") from e
        if not isinstance(data, dict):
            raise SearchError("User search returned an unexpected payload")
        return data

    def __verbose_print__(self, message):
        if self.verbose:
            self.logger.debug(message)


def setup_logging(verbose=False):
    """Send library logging to stderr; DEBUG with --verbose, WARNING otherwise."""
    level = logging.DEBUG if verbose else logging.WARNING
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    # keep urllib3 connection chatter out of --verbose traces
    logging.getLogger('urllib3').setLevel(logging.WARNING)
