"""
HTTP client for the Chef server API

This module provides the authenticated request primitive and the resource
methods for nodes, roles, cookbooks, data bags and search.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union
from urllib.parse import quote_plus

import requests

from .config import ClientConfig, DEFAULT_API_VERSION, resolve_private_key
from .exceptions import DecodeError, TransportError, ValidationError
from .search import sort_search_result
from .signing import ChefRequestSigner, HttpMethod, normalize_method

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_ROWS = 9999

JsonBody = Union[Dict[str, Any], list, str, bytes, None]


class ChefApiClient:
    """
    HTTP client for communicating with a Chef server.

    Every call is signed with the configured client key. Responses are
    decoded JSON; HTTP error statuses are not raised, the decoded error body
    is returned to the caller like any other response.
    """

    def __init__(self, config: ClientConfig, session: Optional[requests.Session] = None):
        """
        Initialize the HTTP client.

        Args:
            config: Server connection settings
            session: Optional requests session to send through
        """
        self.config = config
        self.signer = ChefRequestSigner(config.user_id, config.private_key)
        self.session = session or requests.Session()

        logger.info(f"Initialized Chef API client for server: {config.base_url} as {config.user_id}")

    def __enter__(self) -> 'ChefApiClient':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _encode_body(self, body: JsonBody) -> bytes:
        if body is None:
            return b""
        if isinstance(body, bytes):
            return body
        if isinstance(body, str):
            return body.encode('utf-8')
        try:
            return json.dumps(body).encode('utf-8')
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Request body is not JSON serializable: {e}", "INVALID_BODY") from e

    def _decode_response(self, response: requests.Response) -> Any:
        content = response.content
        if not content or not content.strip():
            return None

        try:
            return json.loads(content)
        except ValueError as e:
            if self.config.strict_decoding:
                raise DecodeError(
                    f"Invalid JSON response: {e}",
                    http_status=response.status_code,
                    details={'status_code': response.status_code}
                ) from e
            logger.debug(f"Response from {response.url} is not JSON, returning None")
            return None

    def build_url(self, path: str, query: Optional[str] = None) -> str:
        """Build the full request URL; the query is appended verbatim."""
        url = f"{self.config.base_url}{path}"
        if query:
            url += f"?{query}"
        return url

    def request(
        self,
        method: Union[str, HttpMethod],
        path: str,
        query: Optional[str] = None,
        body: JsonBody = None
    ) -> Any:
        """
        Make an authenticated request and decode the JSON response.

        Args:
            method: GET, PUT, POST or DELETE
            path: Request path starting with '/'
            query: Optional query string without the leading '?'
            body: Request body (mapping/list encoded as JSON, or pre-encoded text)

        Returns:
            Decoded JSON document, or None for empty/non-JSON bodies

        Raises:
            SigningError: If the request cannot be signed
            TransportError: On connection, timeout or protocol errors
            DecodeError: On non-JSON bodies when strict decoding is enabled
            ValidationError: On invalid arguments
        """
        method = normalize_method(method)
        payload = self._encode_body(body)

        if method in (HttpMethod.PUT, HttpMethod.POST) and not payload:
            raise ValidationError(f"{method.value} requests require a body", "MISSING_BODY")
        if method in (HttpMethod.GET, HttpMethod.DELETE) and payload:
            raise ValidationError(f"{method.value} requests cannot have a body", "UNEXPECTED_BODY")

        signed = self.signer.sign_request(path, method, payload)

        headers = dict(signed.headers)
        headers['X-Chef-Version'] = self.config.api_version
        headers['Accept'] = 'application/json'
        if payload:
            headers['Content-Type'] = 'application/json'

        url = self.build_url(path, query)

        try:
            logger.debug(f"Making {method.value} request to {url}")
            response = self.session.request(
                method.value,
                url,
                headers=headers,
                data=payload or None,
                allow_redirects=False
            )
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request timeout: {e}", "TIMEOUT") from e
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Connection error: {e}", "CONNECTION_ERROR") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {e}") from e

        if not response.ok:
            logger.warning(f"{method.value} {path} returned HTTP {response.status_code}")

        return self._decode_response(response)

    def get(self, path: str, query: Optional[str] = None) -> Any:
        """Perform a GET request."""
        return self.request(HttpMethod.GET, path, query)

    def post(self, path: str, body: JsonBody) -> Any:
        """Perform a POST request."""
        return self.request(HttpMethod.POST, path, body=body)

    def put(self, path: str, body: JsonBody) -> Any:
        """Perform a PUT request."""
        return self.request(HttpMethod.PUT, path, body=body)

    def delete(self, path: str) -> Any:
        """Perform a DELETE request."""
        return self.request(HttpMethod.DELETE, path)

    # Search

    def get_search_indexes(self) -> Any:
        """List the indexes available for search on the Chef server."""
        return self.get('/search')

    def search(
        self,
        index: str,
        query: str,
        sort: str = '',
        start: int = 0,
        rows: int = DEFAULT_SEARCH_ROWS
    ) -> Any:
        """
        Search a Chef server index.

        Args:
            index: Index to search (node, role, client or a data bag name)
            query: Search string, e.g. ``recipes:"php::fpm"``
            sort: Sort the rows by this attribute name, client-side
            start: First result to return; omitted from the query when <= 0
            rows: Maximum number of rows

        Returns:
            dict: The result set
        """
        params = [f"q={quote_plus(query)}", f"rows={rows}"]
        if start > 0:
            params.append(f"start={start}")

        result = self.get(f'/search/{index}', '&'.join(params))

        if sort:
            sort_search_result(result, sort)

        return result

    # Nodes

    def get_nodes(self) -> Any:
        """List the nodes known to the Chef server."""
        return self.get('/nodes')

    def get_node(self, node_name: str) -> Any:
        """Get everything known about a node."""
        return self.get(f'/nodes/{node_name}')

    def get_node_run_list(self, node_name: str) -> Any:
        """Get the roles and recipes in a node's run list."""
        return self.get(f'/nodes/{node_name}/cookbooks')

    # Roles

    def get_roles(self) -> Any:
        return self.get('/roles')

    def get_role(self, role_name: str) -> Any:
        return self.get(f'/roles/{role_name}')

    # Cookbooks

    def get_cookbooks(self) -> Any:
        return self.get('/cookbooks')

    def get_cookbook(self, cookbook_name: str) -> Any:
        return self.get(f'/cookbooks/{cookbook_name}')

    # Data bags

    def get_data_bags(self) -> Any:
        """List the data bags on the Chef server."""
        return self.get('/data')

    def get_data_bag_items(self, data_bag_name: str) -> Any:
        """List the items stored in a data bag."""
        return self.get(f'/data/{data_bag_name}')

    def get_data_bag_item(self, data_bag_name: str, item_id: str) -> Any:
        """Get the contents of a data bag item."""
        return self.get(f'/data/{data_bag_name}/{item_id}')

    def create_data_bag_item(self, data_bag_name: str, item: JsonBody) -> Any:
        """
        Create a data bag item.

        Args:
            data_bag_name: Data bag to add the item to
            item: Item contents; must contain an "id" field (checked by the server)

        Returns:
            The server response
        """
        return self.post(f'/data/{data_bag_name}', item)

    def update_data_bag_item(self, data_bag_name: str, item_id: str, item: JsonBody) -> Any:
        """Replace the contents of a data bag item."""
        return self.put(f'/data/{data_bag_name}/{item_id}', item)

    def delete_data_bag_item(self, data_bag_name: str, item_id: str) -> Any:
        """Delete a data bag item, returning its last contents."""
        return self.delete(f'/data/{data_bag_name}/{item_id}')

    def close(self):
        """Close the HTTP session."""
        if hasattr(self, 'session'):
            self.session.close()
            logger.debug("HTTP session closed")


def create_client(
    host: str,
    port: int,
    user_id: str,
    private_key: Union[bytes, str, Path],
    api_version: str = DEFAULT_API_VERSION,
    **kwargs
) -> ChefApiClient:
    """
    Create a Chef API client.

    Args:
        host: FQDN or IP address of the Chef server
        port: Port the Chef server listens on
        user_id: Client name associated with the private key
        private_key: PEM key bytes, PEM text, or the path of a key file
        api_version: Chef server version sent as X-Chef-Version
        **kwargs: Extra ClientConfig fields (scheme, strict_decoding)

    Returns:
        ChefApiClient: Configured client
    """
    config = ClientConfig(
        host=host,
        port=port,
        user_id=user_id,
        private_key=resolve_private_key(private_key),
        api_version=api_version,
        **kwargs
    )
    return ChefApiClient(config)
