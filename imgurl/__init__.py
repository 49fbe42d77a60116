from .builder import URLBuilder
from .encoding import (
    base64_encode_param,
    classify_proxy,
    encode_path,
    encode_proxy_path,
    encode_query_parameters,
    join_query,
    process_path,
)
from .srcset import SrcsetOptions, target_widths
from .utils import URLSigner, sign_url
from .version import __version__

__all__ = [
    "URLBuilder",
    "URLSigner",
    "SrcsetOptions",
    "base64_encode_param",
    "classify_proxy",
    "encode_path",
    "encode_proxy_path",
    "encode_query_parameters",
    "join_query",
    "process_path",
    "sign_url",
    "target_widths",
    "__version__",
]
