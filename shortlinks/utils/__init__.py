from shortlinks.utils.config import app_env, app_name, app_prefix, load_config
from shortlinks.utils.helpers import base_url, get_link_location, link_to_dict, require_environment
from shortlinks.utils.shortener import generate_hash
from shortlinks.utils.validators import is_web_uri, is_valid_custom_hash
from shortlinks.utils.logging import initialize_logging


__all__ = [
    'generate_hash',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'base_url',
    'get_link_location',
    'link_to_dict',
    'require_environment',
    'is_web_uri',
    'is_valid_custom_hash',
    'initialize_logging',
]
