import logging

from fileshortener.types import HandlerEvent, HandlerResponse
from fileshortener.services import Services
from fileshortener.exceptions import AuthenticationError, ValidationError
from fileshortener.dao.exceptions import ShortURLAlreadyExistsError
from fileshortener.utils import get_short_url
from fileshortener.utils.auth import check_credentials
from fileshortener.utils.helpers import basic_auth, parse_body, guarantee_500_response
from fileshortener.handlers.common import create_short_url, short_url_fields
from fileshortener.handlers.responses import response_200, response_400, response_401, response_409, response_500, short_url_body
from fileshortener.handlers.shorten_url.constants import (
    UNAUTHORIZED,
    INVALID_REQUEST_BODY,
    MISSING_TARGET_URL,
    SHORTCODE_ALREADY_EXISTS,
    SHORTCODE_GENERATION_FAILED,
    SHORTEN_SUCCESS,
    BASIC_AUTH_REALM,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def handler(event: HandlerEvent, services: Services) -> HandlerResponse:
    """Handle incoming API requests to shorten URLs

    This handler follows this procedure to shorten URLs:
    - Step 1: Check HTTP Basic credentials against the configured ones
    - Step 2: Extract target URL, optional shortcode and remark from request body
    - Step 3: Store the mapping, generating a shortcode when none was requested
    - Step 4: Respond to user with 200 success

    HTTP responses:
        200: Successful URL shortening
            short_code: requested or generated shortcode
            target_url: original url (provided in request)
            short_url: full short url
            remark: free-text remark
        400: Bad client request
            message: indicate cause of bad request (invalid JSON or missing target_url)
        401: Unauthorized
            message: missing or invalid credentials
        409: Conflict
            message: requested shortcode is already taken
        500: Internal server error
            message: indicate the server experienced an internal error

    Example:
        >>> event = {
        ...     'headers': {'Authorization': 'Basic YWRtaW46YWRtaW4='},
        ...     'body': '{"target_url": "https://example.com"}',
        ... }
        >>> response = handler(event, services)
        >>> response['statusCode']
        200
    """
    # 1- Check credentials
    credentials = basic_auth(event) or ('', '')
    try:
        check_credentials(
            *credentials,
            expected_username=services.config['auth']['username'],
            expected_password=services.config['auth']['password'],
        )
    except (ValidationError, AuthenticationError) as e:
        logger.info('Rejected shorten request credentials. Responding with 401.', extra={'event': UNAUTHORIZED})
        return response_401(message=str(e), error_code=UNAUTHORIZED, basic_realm=BASIC_AUTH_REALM)

    # 2- Extract request fields
    try:
        request_body = parse_body(event)
    except ValidationError as e:
        logger.info('Invalid request body. Responding with 400.', extra={'event': INVALID_REQUEST_BODY})
        return response_400(message=str(e), error_code=INVALID_REQUEST_BODY)

    target_url, shortcode, remark = short_url_fields(request_body)
    if not target_url:
        logger.info('Missing "target_url" in request body. Responding with 400.', extra={'event': MISSING_TARGET_URL})
        return response_400(message="missing 'target_url' in request body", error_code=MISSING_TARGET_URL)

    # 3- Store the mapping (a shortcode is generated when none was requested)
    try:
        short_url = create_short_url(services, target_url, shortcode, remark)
    except ShortURLAlreadyExistsError:
        logger.info(
            'Requested shortcode already exists. Responding with 409.',
            extra={'shortcode': shortcode, 'event': SHORTCODE_ALREADY_EXISTS},
        )
        return response_409(message=f"short code '{shortcode}' already exists", error_code=SHORTCODE_ALREADY_EXISTS)

    if short_url is None:
        logger.error('Could not generate a free shortcode. Responding with 500.', extra={'event': SHORTCODE_GENERATION_FAILED})
        return response_500(error_code=SHORTCODE_GENERATION_FAILED)

    # 4- Return successful response to user
    short_url_string = get_short_url(short_url.shortcode, event, services.config['shortener']['base_url'])
    logger.info(
        'Shortened URL. Responding with 200.',
        extra={'shortcode': short_url.shortcode, 'event': SHORTEN_SUCCESS},
    )
    return response_200(short_url_body(short_url, short_url_string))
