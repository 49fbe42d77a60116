import hashlib

from .encoding import ENCODE_ERRORS


class URLSigner:
    @staticmethod
    def signature_base(token: str, path: str, query: str) -> str:
        # {TOKEN}{PATH}{?}{QUERY}, the '?' only when a query is present
        delim = "?" if query else ""
        return "".join([token, path, delim, query])

    @staticmethod
    def sign_url(token: str, path: str, query: str) -> str:
        """
        MD5 signature of an already encoded path and joined query string.
        - token: shared secret of the source
        - path: output of encode_path / encode_proxy_path
        - query: '&'-joined output of encode_query_parameters, or ''
        Returns 32 lowercase hex characters.
        """
        base = URLSigner.signature_base(token, path, query)
        return hashlib.md5(base.encode("utf-8", ENCODE_ERRORS)).hexdigest()


sign_url = URLSigner.sign_url
