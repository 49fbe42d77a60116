import base64
from typing import List, Mapping, Sequence, Tuple, Union
from urllib.parse import quote, quote_plus

# Sub-delims left literal inside a single path segment.
PATH_SAFE = "$&+:=@"

ASCII_HTTP = "http://"
ASCII_HTTPS = "https://"
ENCODED_HTTP = "http%3A%2F%2F"
ENCODED_HTTPS = "https%3A%2F%2F"
ENCODED_HTTP_LOWER = "http%3a%2f%2f"
# Older signers shipped this prefix as "https%3a%ff%2f", which never matches
# a real encoded https URL. The corrected form is used here.
ENCODED_HTTPS_LOWER = "https%3a%2f%2f"

BASE64_SUFFIX = "64"

# Lone surrogates are written as their raw UTF-8 form instead of failing.
ENCODE_ERRORS = "surrogatepass"


def path_escape(value: str) -> str:
    """
    Percent-encode a single path segment.
    - unreserved characters and $&+:=@ stay literal
    - '/', ';', ',', '?', space and all non-ASCII bytes become %XX
    """
    return quote(value, safe=PATH_SAFE, errors=ENCODE_ERRORS)


def query_escape(value: str) -> str:
    """Percent-encode a query key or value. Space becomes '+', '+' becomes %2B."""
    return quote_plus(value, safe="", errors=ENCODE_ERRORS)


def _strip_slash(path: str) -> str:
    return path[1:] if path.startswith("/") else path


def classify_proxy(path: str) -> Tuple[bool, bool]:
    """Return (is_proxy, is_encoded) for the given path."""
    p = _strip_slash(path)

    if p.startswith((ASCII_HTTP, ASCII_HTTPS)):
        return True, False
    if p.startswith((ENCODED_HTTP, ENCODED_HTTPS)):
        return True, True
    if p.startswith((ENCODED_HTTP_LOWER, ENCODED_HTTPS_LOWER)):
        return True, True
    return False, False


def encode_proxy_path(path: str, is_encoded: bool) -> str:
    """
    Encode a proxied remote URL as one opaque path unit.

    Already-encoded input is returned untouched. Otherwise the whole
    remainder is escaped at once (its '/' become %2F) and every ':' left
    literal by path_escape is rewritten to %3A.
    """
    if is_encoded:
        return path
    nearly_escaped = "/" + path_escape(_strip_slash(path))
    return nearly_escaped.replace(":", "%3A")


def encode_path(path: str) -> str:
    body = _strip_slash(path)
    if not body:
        return "/"
    segments = [path_escape(segment).replace("+", "%2B") for segment in body.split("/")]
    return "/" + "/".join(segments)


def process_path(path: str) -> str:
    """Pick the proxy or plain encoder for a path and apply it."""
    is_proxy, is_encoded = classify_proxy(path)
    if is_proxy:
        return encode_proxy_path(path, is_encoded)
    return encode_path(path)


def is_base64_key(key: str) -> bool:
    return key.endswith(BASE64_SUFFIX)


def base64_encode_param(value: str) -> str:
    """
    URL-safe base64 of the UTF-8 value with trailing '=' removed.

    Unpadded output is only decodable while each value stays a separately
    delimited query value; callers must not concatenate two of them.
    """
    encoded = base64.urlsafe_b64encode(value.encode("utf-8", ENCODE_ERRORS)).decode("ascii")
    return encoded.rstrip("=")


def _join_values(values: Union[str, Sequence[str]]) -> str:
    if isinstance(values, str):
        return values
    return ",".join(values)


def encode_query_param(key: str, values: Union[str, Sequence[str]]) -> Tuple[str, str]:
    encoded_key = query_escape(key)
    value = _join_values(values)
    if is_base64_key(key):
        return encoded_key, base64_encode_param(value)
    return encoded_key, query_escape(value)


def encode_query_parameters(params: Mapping[str, Sequence[str]]) -> List[str]:
    """
    Canonicalize params into key-sorted 'key=value' parts.

    Multiple values for one key are comma-joined before encoding; a key
    ending in "64" has its value base64-encoded instead of escaped. A bare
    string value counts as a single value.
    """
    parts = []
    for key in sorted(params):
        encoded_key, encoded_value = encode_query_param(key, params[key])
        parts.append(f"{encoded_key}={encoded_value}")
    return parts


def join_query(parts: Sequence[str]) -> str:
    return "&".join(parts)
