import textwrap

import pytest


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / ".config.yaml"
    path.write_text(textwrap.dedent("""\
        demo:
          domain: demo.imgix.net
          include_lib_param: false
        signed:
          domain: demo.imgix.net
          token: FOO123bar
          include_lib_param: false
        plain:
          domain: demo.imgix.net
          use_https: false
          include_lib_param: false
        libparam:
          domain: demo.imgix.net
          token: FOO
        scalar: foo
        nodomain:
          token: abc
    """))
    return str(path)
