"""
JKU Mensa menu fetcher
Loads the weekly menu from the mensen.at GraphQL backend

The backend stores the menu plan as pre-rendered JSON text, so the response
is decoded twice: once for the GraphQL envelope, then the menu string itself.
"""

import json
from typing import Dict

from common.errors import DecodeError, EncodeError
from common.http_client import post
from common.models import MenuPlan

JKU_MENSA_URL = "https://backend.mensen.at/api"
LOCATION_URI = "standort/mensa-jku/"
REQUEST_TIMEOUT = 10

LOCATION_QUERY = """query Location($locationUri: String!, $weekDay: String!) {
  nodeByUri(uri: $locationUri) {
    ... on Location {
      databaseId
      title
      uri
      menuplanCurrentWeek
      menuplanNextWeek
      openingHour(day: $weekDay) {
        nowDate
        nowWeekDay
        status
        from
        to
        closed
        reopen
      }
    }
  }
}"""

REQUEST_HEADERS = {
    'accept': '*/*',
    'accept-language': 'en-US,en;q=0.8',
    'cache-control': 'no-cache',
    'content-type': 'application/json',
    'origin': 'https://www.mensen.at',
    'pragma': 'no-cache',
    'referer': 'https://www.mensen.at/',
    'user-agent': 'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 '
                  '(KHTML, like Gecko) Chrome/142.0.0.0 Safari/537.36',
}

CURRENT_WEEK_FIELD = 'menuplanCurrentWeek'
NEXT_WEEK_FIELD = 'menuplanNextWeek'


def build_request_payload(location_uri: str = LOCATION_URI, week_day: str = "now") -> Dict:
    """Build the GraphQL request envelope for a location"""
    return {
        'query': LOCATION_QUERY,
        'variables': {
            'locationUri': location_uri,
            'weekDay': week_day,
        },
        'operationName': 'Location',
    }


def encode_payload(payload: Dict) -> bytes:
    """
    Serialize the request envelope

    Raises:
        EncodeError: If the payload is not JSON serializable
    """
    try:
        return json.dumps(payload).encode('utf-8')
    except (TypeError, ValueError) as e:
        raise EncodeError(f"Error encoding request payload: {e}") from e


def extract_menu_string(body: str, field: str = CURRENT_WEEK_FIELD) -> str:
    """
    Pull the stringified menu out of the GraphQL response

    Args:
        body: Raw response body
        field: Location field holding the menu JSON

    Returns:
        The menu JSON text ("" if the field is empty or missing)

    Raises:
        DecodeError: If the body is not JSON or lacks data.nodeByUri
    """
    try:
        envelope = json.loads(body)
    except ValueError as e:
        raise DecodeError(f"Error decoding outer JSON: {e}\nBody: {body[:500]}") from e

    data = envelope.get('data') if isinstance(envelope, dict) else None
    if not isinstance(data, dict):
        errors = envelope.get('errors') if isinstance(envelope, dict) else None
        raise DecodeError(f"Response has no 'data' object (errors: {errors})\nBody: {body[:500]}")

    node = data.get('nodeByUri')
    if not isinstance(node, dict):
        raise DecodeError(f"Response has no location node\nBody: {body[:500]}")

    menu_string = node.get(field)
    if menu_string is None:
        return ''
    if not isinstance(menu_string, str):
        raise DecodeError(f"Field '{field}' should be a string, got {type(menu_string).__name__}")
    return menu_string


def decode_menu_plan(menu_string: str) -> MenuPlan:
    """
    Decode the inner menu JSON into a MenuPlan

    Raises:
        DecodeError: If the text is not JSON or not a menu plan
    """
    try:
        data = json.loads(menu_string)
    except ValueError as e:
        raise DecodeError(f"Error decoding inner menu JSON: {e}\nString was: {menu_string[:500]}") from e
    return MenuPlan.from_dict(data)


def fetch_api_menu(url: str = JKU_MENSA_URL, location_uri: str = LOCATION_URI,
                   timeout: float = REQUEST_TIMEOUT, next_week: bool = False) -> MenuPlan:
    """
    Fetch the JKU Mensa menu plan

    Args:
        url: GraphQL endpoint
        location_uri: Location node to query
        timeout: Request timeout in seconds
        next_week: Decode next week's plan instead of the current one

    Returns:
        MenuPlan for the requested week

    Raises:
        EncodeError: If the request cannot be serialized
        FetchError: On network failure, timeout or a non-200 status
        DecodeError: If either JSON layer has an unexpected shape
    """
    print(f"Fetching JKU Mensa menu from {url}...")
    payload = encode_payload(build_request_payload(location_uri))
    response = post(url, payload, timeout=timeout, headers=REQUEST_HEADERS)

    field = NEXT_WEEK_FIELD if next_week else CURRENT_WEEK_FIELD
    plan = decode_menu_plan(extract_menu_string(response.text, field))
    print(f"  Found {len(plan.menus)} menu categories for week {plan.week or '?'}/{plan.year or '?'}")
    return plan
