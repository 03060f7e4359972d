from fileshortener.utils.config import app_env, app_name, project_root, load_config
from fileshortener.utils.helpers import base_url, get_short_url, guarantee_500_response
from fileshortener.utils.shortener import generate_shortcode
from fileshortener.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'app_env',
    'app_name',
    'project_root',
    'load_config',
    'base_url',
    'get_short_url',
    'guarantee_500_response',
    'initialize_logging',
]
