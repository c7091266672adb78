"""Turn raw response bodies into records, pages or errors

Every function here either returns what was asked for or raises DecodeError; nothing is defaulted
silently except the two keys fleet is documented to omit on pages (an empty item list and the final
continuation token).
"""
import collections
import json

from .errors import DecodeError, RemoteError

Page = collections.namedtuple('Page', ['next_page_token', 'items'])


def decode_json(content):
    """Parse a response body as JSON

    Args:
        content (bytes or str): The raw body

    Returns:
        The decoded JSON value

    Raises:
        clusterclient.errors.DecodeError: The body was not valid JSON
    """
    try:
        if isinstance(content, bytes):
            content = content.decode('utf-8')

        return json.loads(content)
    except (UnicodeDecodeError, ValueError) as exc:
        raise DecodeError('Response body is not valid JSON: {0}'.format(exc), content=content) from exc


def decode_object(content, factory):
    """Decode a body holding a single JSON object into a record

    Args:
        content (bytes): The raw body
        factory (callable): Called with the decoded dict, returns the record

    Raises:
        clusterclient.errors.DecodeError: The body was not a JSON object
    """
    payload = decode_json(content)

    if not isinstance(payload, dict):
        raise DecodeError('Expected a JSON object, got {0}'.format(type(payload).__name__), content=content)

    return factory(payload)


def decode_list(content, factory):
    """Decode a body holding a JSON array of objects into a list of records

    Raises:
        clusterclient.errors.DecodeError: The body was not an array of objects
    """
    payload = decode_json(content)

    return _decode_items(payload, factory, content)


def _decode_items(items, factory, content):
    if not isinstance(items, list):
        raise DecodeError('Expected a JSON array, got {0}'.format(type(items).__name__), content=content)

    records = []
    for item in items:
        if not isinstance(item, dict):
            raise DecodeError('Expected an array of objects, found {0}'.format(type(item).__name__), content=content)

        records.append(factory(item))

    return records


def decode_page(content, items_key, factory):
    """Decode one page of a paginated listing

    Pages look like ``{"nextPageToken": "...", "<items_key>": [...]}``. Fleet leaves out the items key when
    there are none, and the token on the last page.

    Args:
        content (bytes): The raw body
        items_key (str): The key holding this listing's records, e.g. 'units'
        factory (callable): Called with each item dict, returns the record

    Returns:
        Page: (next_page_token, items) with items in server order

    Raises:
        clusterclient.errors.DecodeError: The body was not a page of ``items_key``
    """
    payload = decode_json(content)

    if not isinstance(payload, dict):
        raise DecodeError('Expected a page object, got {0}'.format(type(payload).__name__), content=content)

    token = payload.get('nextPageToken') or ''
    if not isinstance(token, str):
        raise DecodeError('nextPageToken must be a string, got {0!r}'.format(token), content=content)

    items = _decode_items(payload.get(items_key, []), factory, content)

    return Page(next_page_token=token, items=items)


def parse_fleet_error(payload):
    """Extract (code, message) from fleet's ``{"error": {"code": ..., "message": ...}}`` envelope

    A bare ``{"code": ..., "message": ...}`` is accepted too. Returns None when ``payload`` isn't an envelope.
    """
    if isinstance(payload, dict) and isinstance(payload.get('error'), dict):
        payload = payload['error']

    if not isinstance(payload, dict) or 'code' not in payload or 'message' not in payload:
        return None

    return (payload['code'], payload['message'])


def decode_error(status, content, parse_envelope=parse_fleet_error, errors=None):
    """Build the RemoteError describing a failed response

    The body is decoded as the service's error envelope, never as the success shape. When it isn't a
    valid envelope, the HTTP status becomes the code and the body text the message.

    Args:
        status (int): The HTTP status of the response
        content (bytes): The raw body
        parse_envelope (callable): Takes the decoded JSON, returns (code, message) or None
        errors (dict, optional): Maps HTTP status to the RemoteError subclass to build

    Returns:
        RemoteError: The error, ready to be raised
    """
    error_class = (errors or {}).get(status, RemoteError)

    envelope = None
    try:
        envelope = parse_envelope(decode_json(content))
    except DecodeError:
        pass

    if envelope is None:
        if isinstance(content, bytes):
            content = content.decode('utf-8', 'replace')

        return error_class(status, content.strip() or 'HTTP {0}'.format(status), status=status)

    (code, message) = envelope
    if code is None:
        code = status

    return error_class(code, message, status=status)
