import yaml

from imgurl.builder import URLBuilder


def load_config(profile: str, config_file: str = ".config.yaml") -> dict:
    """Load the configuration for a specific source profile from the YAML file."""
    with open(config_file, "r") as f:
        full_config = yaml.safe_load(f) or {}

    if profile not in full_config:
        raise ValueError(f"Profile '{profile}' not found in {config_file}")

    conf = full_config[profile] or {}
    if not isinstance(conf, dict):
        raise ValueError(f"Profile '{profile}' in {config_file} must be a mapping")
    if not conf.get("domain"):
        raise ValueError(f"Missing 'domain' in config for profile '{profile}'")
    return conf


def builder_from_config(conf: dict) -> URLBuilder:
    return URLBuilder(
        domain=conf["domain"],
        token=conf.get("token"),
        use_https=conf.get("use_https", True),
        include_lib_param=conf.get("include_lib_param", True),
    )
