"""
HTTP helpers shared by the menu sources
Wraps requests so that every failure surfaces as a FetchError
"""

from typing import Dict, Optional

import requests

from common.errors import FetchError

# How much of an error response body to keep for diagnosis
BODY_SNIPPET_LENGTH = 500


def _snippet(text: str) -> str:
    if len(text) > BODY_SNIPPET_LENGTH:
        return text[:BODY_SNIPPET_LENGTH] + '...'
    return text


def _check_response(response: requests.Response, url: str) -> requests.Response:
    """Raise FetchError unless the response status is 200"""
    if response.status_code != 200:
        body = _snippet(response.text)
        raise FetchError(
            f"Request to {url} failed with status {response.status_code} {response.reason}\n"
            f"Response: {body}",
            url=url,
            status=response.status_code,
            body=body
        )
    return response


def get(url: str, timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None) -> requests.Response:
    """
    Issue a GET request

    Args:
        url: URL to fetch
        timeout: Request timeout in seconds (None waits indefinitely)
        headers: Extra request headers

    Returns:
        The successful response

    Raises:
        FetchError: On transport failure or a non-200 status
    """
    try:
        response = requests.get(url, timeout=timeout, headers=headers)
    except requests.RequestException as e:
        raise FetchError(f"Failed to fetch URL {url}: {e}", url=url) from e
    return _check_response(response, url)


def post(url: str, data: bytes, timeout: Optional[float] = None,
         headers: Optional[Dict[str, str]] = None) -> requests.Response:
    """
    Issue a POST request with a pre-encoded body

    Args:
        url: URL to post to
        data: Request body
        timeout: Request timeout in seconds (None waits indefinitely)
        headers: Request headers

    Returns:
        The successful response

    Raises:
        FetchError: On transport failure, timeout or a non-200 status
    """
    try:
        response = requests.post(url, data=data, timeout=timeout, headers=headers)
    except requests.Timeout as e:
        raise FetchError(f"Request to {url} timed out after {timeout}s", url=url) from e
    except requests.RequestException as e:
        raise FetchError(f"Error sending request to {url}: {e}", url=url) from e
    return _check_response(response, url)
