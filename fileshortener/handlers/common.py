"""Request parsing and store calls shared by the shorten and admin handlers"""

import logging

from fileshortener.models import ShortURLModel
from fileshortener.services import Services
from fileshortener.dao.exceptions import ShortURLAlreadyExistsError
from fileshortener.utils import generate_shortcode


logger = logging.getLogger(__name__)

# Attempts at drawing a free random shortcode before giving up
MAX_SHORTCODE_ATTEMPTS = 5


def create_short_url(services: Services, target_url: str, shortcode: str = '', remark: str = '') -> ShortURLModel | None:
    """Insert a short URL, drawing a random shortcode when none is requested

    A requested shortcode is inserted as is. A generated one is drawn again when it
    collides, up to MAX_SHORTCODE_ATTEMPTS times.

    Returns:
        ShortURLModel | None:
            The stored record, or None when every generated shortcode collided.

    Raises:
        ShortURLAlreadyExistsError:
            If the requested shortcode is taken.
        ValidationError:
            If the target URL is empty.
    """
    if shortcode:
        return services.short_urls.insert(ShortURLModel(shortcode=shortcode, target=target_url, remark=remark))

    length = int(services.config['shortener']['code_length'])
    for attempt in range(1, MAX_SHORTCODE_ATTEMPTS + 1):
        candidate = generate_shortcode(length)
        try:
            return services.short_urls.insert(ShortURLModel(shortcode=candidate, target=target_url, remark=remark))
        except ShortURLAlreadyExistsError:
            logger.warning('Generated shortcode collided with an existing one.', extra={'attempt': attempt})
    return None


def short_url_fields(body: dict) -> tuple[str, str, str]:
    """Return (target_url, short_code, remark) from a request body, defaulted to ''. URL and code are stripped."""
    target_url = str(body.get('target_url') or '').strip()
    shortcode = str(body.get('short_code') or '').strip()
    remark = str(body.get('remark') or '')
    return target_url, shortcode, remark
