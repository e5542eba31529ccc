import json
import logging
import os

import yaml

"""
Configuration file reading for ``get_davclient``.

A configuration file is a dict of named sections, in JSON or YAML::

    {
        "default": {"webdav_url": "https://dav.example.com/", "webdav_user": "tobias"},
        "work": {"inherits": "default", "webdav_url": "https://dav.example.org/"}
    }
"""

log = logging.getLogger(__name__)


def config_section(config, section="default"):
    """
    The settings of section, merged on top of the section it inherits
    (recursively).
    """
    if section in config and "inherits" in config[section]:
        ret = config_section(config, config[section]["inherits"])
    else:
        ret = {}
    if section in config:
        ret.update(config[section])
    return ret


def read_config(fn):
    """
    Read a JSON or YAML configuration file.  Without a file name the
    usual locations are tried, first file found wins.

    Returns the configuration dict, an empty dict if the file does not
    exist or is broken, or None if no file name was given and none of
    the usual locations has a configuration.
    """
    if not fn:
        cfgdir = f"{os.environ.get('HOME', '/')}/.config/"
        for config_file in (
            f"{cfgdir}/webdav/webdav.conf",
            f"{cfgdir}/webdav/webdav.yaml",
            f"{cfgdir}/webdav/webdav.json",
            "/etc/webdav/webdav.conf",
        ):
            cfg = read_config(config_file)
            if cfg:
                return cfg
        return None

    try:
        with open(fn, "rb") as config_file:
            content = config_file.read()
    except FileNotFoundError:
        log.info(f"no config file {fn} found")
        return {}

    try:
        return json.loads(content)
    except json.decoder.JSONDecodeError:
        pass

    ## YAML is a superset of JSON, but yaml error messages are less helpful
    try:
        cfg = yaml.safe_load(content)
    except yaml.YAMLError:
        log.error(
            f"config file {fn} exists but is neither valid json nor yaml.  Check the syntax."
        )
        return {}
    if not isinstance(cfg, dict):
        log.error(f"config file {fn} should contain a dict of sections.  It will be ignored")
        return {}
    return cfg
