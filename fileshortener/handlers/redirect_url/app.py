import logging

from fileshortener.types import HandlerEvent, HandlerResponse
from fileshortener.services import Services
from fileshortener.dao.exceptions import ShortURLNotFoundError
from fileshortener.utils import get_short_url
from fileshortener.utils.helpers import guarantee_500_response
from fileshortener.handlers.responses import response_302, response_400, response_404
from fileshortener.handlers.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def handler(event: HandlerEvent, services: Services) -> HandlerResponse:
    """Handle incoming requests to redirect short URLs

    This handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Get short URL record from the store
    - Step 3: Redirect client to target URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing shortcode in path parameters
        404: Not found
            message: no short URL with this shortcode
        500: Internal server error
            message: server experienced an internal error

    Args:
        event (dict):
            API Gateway style event payload containing the shortcode path parameter.
        services (Services):
            Shared data stores.

    Returns:
        dict:
            Proxy-format response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'shortcode': 'Gh71TC'}}
        >>> response = handler(event, services)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    configured_base_url = services.config['shortener']['base_url']

    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info(
            'Missing "shortcode" in path. Responding with 400.',
            extra={'event': MISSING_SHORTCODE},
        )
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)
    logger.debug('Client requested short URL %s.', get_short_url(shortcode, event, configured_base_url))

    # 2- Get short_url record from the store
    try:
        short_url = services.short_urls.get(shortcode)
    except ShortURLNotFoundError:
        logger.info(
            'Short URL record not found. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(
            message=f"short url {get_short_url(shortcode, event, configured_base_url)} doesn't exist",
            error_code=SHORT_URL_NOT_FOUND,
        )

    # 3- Redirect client to target URL
    logger.info(
        'Redirecting client to target URL. Responding with 302.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response_302(location=short_url.target)
