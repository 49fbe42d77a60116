import pytest

from imgurl.encoding import (
    base64_encode_param,
    classify_proxy,
    encode_path,
    encode_proxy_path,
    encode_query_parameters,
    join_query,
    path_escape,
    process_path,
    query_escape,
)


@pytest.mark.parametrize("path", [
    "http://example.com/a.png",
    "/http://example.com/a.png",
    "https://example.com/a.png",
    "/https://example.com/a.png?x=1",
])
def test_raw_proxy_paths_are_not_encoded(path):
    assert classify_proxy(path) == (True, False)


@pytest.mark.parametrize("path", [
    "http%3A%2F%2Fexample.com%2Fa.png",
    "/https%3A%2F%2Fexample.com%2Fa.png",
    "/http%3a%2f%2fexample.com%2fa.png",
    "https%3a%2f%2fexample.com%2fa.png",
])
def test_percent_encoded_proxy_paths(path):
    assert classify_proxy(path) == (True, True)


@pytest.mark.parametrize("path", [
    "",
    "/",
    "/images/a.png",
    "HTTP://example.com/a.png",
    "//http://example.com",
    "/ftp://example.com/a.png",
    "/http%3A%2Fexample.com",
])
def test_non_proxy_paths(path):
    assert classify_proxy(path) == (False, False)


def test_lowercase_https_prefix_uses_escaped_slash():
    # the historical "https%3a%ff%2f" prefix is not treated as a proxy
    assert classify_proxy("/https%3a%2f%2fexample.com") == (True, True)
    assert classify_proxy("/https%3a%ff%2fexample.com") == (False, False)


def test_path_escape_convention():
    assert path_escape("a b") == "a%20b"
    assert path_escape("a/b;c,d?e") == "a%2Fb%3Bc%2Cd%3Fe"
    assert path_escape("$&+:=@") == "$&+:=@"
    assert path_escape("-_.~") == "-_.~"
    assert path_escape("é") == "%C3%A9"


def test_query_escape_convention():
    assert query_escape("a b") == "a+b"
    assert query_escape("a+b") == "a%2Bb"
    assert query_escape("a:b/c,d") == "a%3Ab%2Fc%2Cd"


@pytest.mark.parametrize("path", ["", "/"])
def test_encode_empty_path(path):
    assert encode_path(path) == "/"


def test_encode_path_escapes_each_segment():
    assert encode_path("/a/b c/d+e") == "/a/b%20c/d%2Be"


def test_encode_path_without_leading_slash():
    assert encode_path("a/b c") == encode_path("/a/b c") == "/a/b%20c"


def test_encode_path_keeps_segments_and_escapes_reserved():
    assert encode_path("/images/ümlaut?.png") == "/images/%C3%BCmlaut%3F.png"
    assert encode_path("/a:b/c@d") == "/a:b/c@d"
    assert encode_path("/trailing/") == "/trailing/"


def test_encode_path_double_escapes_percent():
    assert encode_path("/a%20b") == "/a%2520b"


@pytest.mark.parametrize("path", [
    "/http%3A%2F%2Fexample.com%2Fa.png",
    "anything at all",
    "",
])
def test_encoded_proxy_is_returned_unchanged(path):
    assert encode_proxy_path(path, True) == path


def test_encode_raw_proxy_as_single_unit():
    encoded = encode_proxy_path("/http://example.com/a:b", False)
    assert encoded == "/http%3A%2F%2Fexample.com%2Fa%3Ab"
    assert encoded.count("/") == 1
    assert ":" not in encoded


def test_encode_raw_proxy_without_leading_slash():
    assert encode_proxy_path("https://example.com/a b.png", False) == \
        "/https%3A%2F%2Fexample.com%2Fa%20b.png"


def test_raw_proxy_encoding_is_not_idempotent():
    once = encode_proxy_path("/http://example.com/a b", False)
    assert encode_proxy_path(once, False) != once


def test_process_path_dispatches():
    assert process_path("/http://a.com/b") == "/http%3A%2F%2Fa.com%2Fb"
    assert process_path("/http%3A%2F%2Fa.com%2Fb") == "/http%3A%2F%2Fa.com%2Fb"
    assert process_path("/a b/c") == "/a%20b/c"


def test_query_parts_are_sorted_by_key():
    assert encode_query_parameters({"w": ["100"], "h": ["200"]}) == ["h=200", "w=100"]


def test_query_is_deterministic_regardless_of_insertion_order():
    first = {"w": ["100"], "fit": ["crop"], "h": ["200"], "txt64": ["hi"]}
    second = dict(reversed(list(first.items())))
    assert encode_query_parameters(first) == encode_query_parameters(second)


def test_base64_keys_are_base64_encoded():
    assert encode_query_parameters({"txt64": ["héllo"], "txt": ["héllo"]}) == [
        "txt=h%C3%A9llo",
        "txt64=aMOpbGxv",
    ]


def test_multiple_values_are_comma_joined_before_encoding():
    assert encode_query_parameters({"rect": ["0", "0", "100", "100"]}) == ["rect=0%2C0%2C100%2C100"]
    assert encode_query_parameters({"mark64": ["a", "b"]}) == ["mark64=YSxi"]


def test_empty_and_string_values():
    assert encode_query_parameters({"fm": []}) == ["fm="]
    assert encode_query_parameters({"fm": "png"}) == ["fm=png"]
    assert encode_query_parameters({}) == []


def test_query_value_space_and_plus_stay_distinct():
    parts = encode_query_parameters({"txt": ["a b+c"]})
    assert parts == ["txt=a+b%2Bc"]


def test_query_keys_are_escaped():
    assert encode_query_parameters({"a b": ["1"]}) == ["a+b=1"]


def test_base64_encode_param_is_url_safe_and_unpadded():
    assert base64_encode_param("hello") == "aGVsbG8"
    assert base64_encode_param("?>?") == "Pz4_"
    assert base64_encode_param("~~~") == "fn5-"
    assert base64_encode_param("") == ""


def test_join_query():
    assert join_query(["a=1", "b=2"]) == "a=1&b=2"
    assert join_query([]) == ""


def test_lone_surrogates_are_encoded_not_rejected():
    assert encode_path("\ud800") == "/%ED%A0%80"
    assert encode_proxy_path("http://a.com/\ud800", False) == "/http%3A%2F%2Fa.com%2F%ED%A0%80"
    assert query_escape("\ud800") == "%ED%A0%80"
    assert base64_encode_param("\ud800") == "7aCA"
