import logging
import re
from typing import Dict, List, Mapping, Optional, Sequence, Union

from .encoding import encode_query_parameters, join_query, process_path
from .srcset import SrcsetOptions, build_srcset
from .utils import URLSigner
from .version import __version__

logger = logging.getLogger(__name__)

LIB_PARAM = "ixlib"
LIB_VERSION = f"python-{__version__}"
SIGNATURE_PARAM = "s"

DOMAIN_PATTERN = re.compile(
    r"^(?:[a-z\d\-_]{1,62}\.){0,125}"
    r"(?:[a-z\d](?:\-(?=\-*[a-z\d])|[a-z\d]){0,62}\.)"
    r"[a-z\d]{1,63}$"
)

Params = Mapping[str, Union[str, Sequence[str]]]


def normalize_params(params: Optional[Params]) -> Dict[str, List[str]]:
    """Copy params into a fresh dict of value lists."""
    out = {}
    for key, values in (params or {}).items():
        if isinstance(values, str):
            out[key] = [values]
        else:
            out[key] = [str(v) for v in values]
    return out


class URLBuilder:
    def __init__(self, domain: str, token: str = None, use_https: bool = True, include_lib_param: bool = True):
        if not domain or not DOMAIN_PATTERN.match(domain):
            raise ValueError(
                f"Invalid domain '{domain}': expected a bare host such as "
                "'example.imgix.net' without scheme, path or trailing slash"
            )
        self.domain = domain
        self.token = token
        self.use_https = use_https
        self.include_lib_param = include_lib_param

    @property
    def scheme(self) -> str:
        return "https" if self.use_https else "http"

    def set_token(self, token: str) -> None:
        self.token = token

    def set_use_https(self, use_https: bool) -> None:
        self.use_https = use_https

    def set_include_lib_param(self, include_lib_param: bool) -> None:
        self.include_lib_param = include_lib_param

    def sign(self, path: str, params: Optional[Params] = None) -> (str, str, Optional[str]):
        """Return the encoded path, the canonical query and its signature (None without a token)."""
        encoded_path = process_path(path)
        query_params = normalize_params(params)
        if self.include_lib_param:
            query_params[LIB_PARAM] = [LIB_VERSION]
        query = join_query(encode_query_parameters(query_params))

        signature = None
        if self.token:
            signature = URLSigner.sign_url(self.token, encoded_path, query)
        return encoded_path, query, signature

    def encode(self, path: str, params: Optional[Params] = None) -> (str, str):
        """Return the encoded path and '&'-joined query, signature included."""
        encoded_path, query, signature = self.sign(path, params)
        if signature:
            sig_part = f"{SIGNATURE_PARAM}={signature}"
            query = f"{query}&{sig_part}" if query else sig_part
        return encoded_path, query

    def create_url(self, path: str, params: Optional[Params] = None) -> str:
        encoded_path, query = self.encode(path, params)
        url = f"{self.scheme}://{self.domain}{encoded_path}"
        if query:
            url += "?" + query
        logger.debug("Built URL for %s (signed=%s): %s", path, bool(self.token), url)
        return url

    def create_srcset(self, path: str, params: Optional[Params] = None, options: SrcsetOptions = None) -> str:
        return build_srcset(self.create_url, path, normalize_params(params), options or SrcsetOptions())
