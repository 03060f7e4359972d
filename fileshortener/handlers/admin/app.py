"""Admin request handlers: session login/logout and short URL management

Every management handler requires a live session carrying a username, which only
login_handler puts there. Sessions are identified by the `shorten_session` cookie
(name configurable under sessions.cookie_name).

Handlers:
    login_handler        POST   /admin/login            {username, password}
    logout_handler       POST   /admin/logout
    list_urls_handler    GET    /admin/urls
    get_url_handler      GET    /admin/urls/{shortcode}
    create_url_handler   POST   /admin/urls             {target_url, short_code?, remark?}
    update_url_handler   PUT    /admin/urls/{shortcode} {target_url, remark?}
    delete_url_handler   DELETE /admin/urls/{shortcode}
"""

import logging
import functools
from typing import TypeAlias
from collections.abc import Callable

from fileshortener.models import ShortURLModel, SessionModel
from fileshortener.types import HandlerEvent, HandlerResponse
from fileshortener.services import Services
from fileshortener.exceptions import AuthenticationError, ValidationError
from fileshortener.dao.exceptions import SessionNotFoundError, ShortURLAlreadyExistsError, ShortURLNotFoundError
from fileshortener.utils import get_short_url
from fileshortener.utils.auth import check_credentials
from fileshortener.utils.helpers import (
    parse_body,
    session_token,
    session_cookie,
    expired_session_cookie,
    guarantee_500_response,
)
from fileshortener.handlers.common import create_short_url, short_url_fields
from fileshortener.handlers.responses import (
    response_200,
    response_201,
    response_400,
    response_401,
    response_404,
    response_409,
    response_500,
    short_url_body,
)
from fileshortener.handlers.admin.constants import (
    INVALID_REQUEST,
    INVALID_CREDENTIALS,
    LOGIN_SUCCESS,
    LOGOUT_SUCCESS,
    SESSION_REQUIRED,
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    SHORTCODE_ALREADY_EXISTS,
    SHORTCODE_GENERATION_FAILED,
    URL_CREATED,
    URL_UPDATED,
    URL_DELETED,
)


logger = logging.getLogger(__name__)


AdminHandler: TypeAlias = Callable[[HandlerEvent, Services, SessionModel], HandlerResponse]


def _cookie_name(services: Services) -> str:
    return services.config['sessions']['cookie_name']


def _short_url_json(short_url: ShortURLModel, event: HandlerEvent, services: Services) -> dict:
    return short_url_body(short_url, get_short_url(short_url.shortcode, event, services.config['shortener']['base_url']))


def _path_shortcode(event: HandlerEvent) -> str | None:
    return (event.get('pathParameters') or {}).get('shortcode') or None


def login_required(handler: AdminHandler) -> Callable[[HandlerEvent, Services], HandlerResponse]:
    """Decorator: resolve the request's session, responding 401 unless it is live and logged in

    The wrapped handler receives the session as a third argument. The session is
    not renewed, only login_handler extends its lifetime.
    """

    @functools.wraps(handler)
    def wrapper(event: HandlerEvent, services: Services) -> HandlerResponse:
        token = session_token(event, _cookie_name(services))
        try:
            session = services.sessions.get(token)
        except SessionNotFoundError as e:
            logger.info('No live session. Responding with 401.', extra={'event': SESSION_REQUIRED, 'reason': str(e)})
            return response_401(message='login required', error_code=SESSION_REQUIRED)

        if not session.username:
            logger.info('Session is not logged in. Responding with 401.', extra={'event': SESSION_REQUIRED})
            return response_401(message='login required', error_code=SESSION_REQUIRED)

        return handler(event, services, session)

    return wrapper


@guarantee_500_response
def login_handler(event: HandlerEvent, services: Services) -> HandlerResponse:
    """Check admin credentials and attach the username to the request's session

    This handler follows this procedure:
    - Step 1: Extract username and password from JSON or form body
    - Step 2: Check them against the configured credentials
    - Step 3: Renew the request's session, or issue a new one
    - Step 4: Respond with 200, setting the session cookie if a new session was issued

    HTTP responses:
        200: Logged in
        400: Missing username or password, or unreadable body
        401: Wrong username or password
    """
    # 1- Extract credentials
    try:
        request_body = parse_body(event)
    except ValidationError as e:
        logger.info('Invalid login request body. Responding with 400.', extra={'event': INVALID_REQUEST})
        return response_400(message=str(e), error_code=INVALID_REQUEST)

    username = str(request_body.get('username') or '')
    password = str(request_body.get('password') or '')

    # 2- Check credentials
    try:
        check_credentials(
            username,
            password,
            expected_username=services.config['auth']['username'],
            expected_password=services.config['auth']['password'],
        )
    except ValidationError as e:
        logger.info('Missing login credentials. Responding with 400.', extra={'event': INVALID_REQUEST})
        return response_400(message=str(e), error_code=INVALID_REQUEST)
    except AuthenticationError as e:
        logger.info('Invalid login credentials. Responding with 401.', extra={'event': INVALID_CREDENTIALS})
        return response_401(message=str(e), error_code=INVALID_CREDENTIALS)

    # 3- Start or renew the session
    session, issued = services.sessions.start(session_token(event, _cookie_name(services)), username=username)

    # 4- Respond, attaching the cookie for new sessions
    headers = None
    if issued:
        headers = {
            'Set-Cookie': session_cookie(
                _cookie_name(services),
                session.id,
                max_age=int(services.sessions.max_lifetime.total_seconds()),
                secure=bool(services.config['sessions']['secure_cookie']),
            )
        }

    logger.info('Admin logged in. Responding with 200.', extra={'event': LOGIN_SUCCESS, 'new_session': issued})
    return response_200(
        {'message': 'Logged in', 'username': session.username, 'expires_at': session.expires_at.isoformat()},
        headers=headers,
    )


@guarantee_500_response
def logout_handler(event: HandlerEvent, services: Services) -> HandlerResponse:
    """Destroy the request's session, if any, and clear the cookie. Always 200."""
    destroyed = services.sessions.destroy(session_token(event, _cookie_name(services)))
    logger.info('Admin logged out. Responding with 200.', extra={'event': LOGOUT_SUCCESS, 'destroyed': destroyed})
    return response_200(
        {'message': 'Logged out'},
        headers={
            'Set-Cookie': expired_session_cookie(
                _cookie_name(services),
                secure=bool(services.config['sessions']['secure_cookie']),
            )
        },
    )


@guarantee_500_response
@login_required
def list_urls_handler(event: HandlerEvent, services: Services, session: SessionModel) -> HandlerResponse:
    """List every short URL, newest first"""
    short_urls = sorted(
        services.short_urls.all(),
        key=lambda short_url: (short_url.created_at is not None, short_url.created_at, short_url.shortcode),
        reverse=True,
    )
    return response_200(
        {
            'urls': [_short_url_json(short_url, event, services) for short_url in short_urls],
            'count': len(short_urls),
        }
    )


@guarantee_500_response
@login_required
def get_url_handler(event: HandlerEvent, services: Services, session: SessionModel) -> HandlerResponse:
    shortcode = _path_shortcode(event)
    if shortcode is None:
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)

    try:
        short_url = services.short_urls.get(shortcode)
    except ShortURLNotFoundError as e:
        logger.info('Short URL record not found. Responding with 404.', extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND})
        return response_404(message=str(e), error_code=SHORT_URL_NOT_FOUND)

    return response_200(_short_url_json(short_url, event, services))


@guarantee_500_response
@login_required
def create_url_handler(event: HandlerEvent, services: Services, session: SessionModel) -> HandlerResponse:
    """Create a short URL. A shortcode is generated when the body doesn't carry one.

    HTTP responses:
        201: Created, body is the new record
        400: Unreadable body or empty target_url
        401: No logged-in session
        409: Requested shortcode already exists
    """
    try:
        target_url, shortcode, remark = short_url_fields(parse_body(event))
        short_url = create_short_url(services, target_url, shortcode, remark)
    except ValidationError as e:
        logger.info('Invalid short URL. Responding with 400.', extra={'event': INVALID_REQUEST})
        return response_400(message=str(e), error_code=INVALID_REQUEST)
    except ShortURLAlreadyExistsError as e:
        logger.info('Requested shortcode already exists. Responding with 409.', extra={'shortcode': shortcode, 'event': SHORTCODE_ALREADY_EXISTS})
        return response_409(message=str(e), error_code=SHORTCODE_ALREADY_EXISTS)

    if short_url is None:
        logger.error('Could not generate a free shortcode. Responding with 500.', extra={'event': SHORTCODE_GENERATION_FAILED})
        return response_500(error_code=SHORTCODE_GENERATION_FAILED)

    logger.info(
        'Admin created short URL. Responding with 201.',
        extra={'shortcode': short_url.shortcode, 'username': session.username, 'event': URL_CREATED},
    )
    return response_201(_short_url_json(short_url, event, services))


@guarantee_500_response
@login_required
def update_url_handler(event: HandlerEvent, services: Services, session: SessionModel) -> HandlerResponse:
    """Replace target URL and remark of an existing short URL. The creation time is kept."""
    shortcode = _path_shortcode(event)
    if shortcode is None:
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)

    try:
        target_url, _, remark = short_url_fields(parse_body(event))
        short_url = services.short_urls.update(ShortURLModel(shortcode=shortcode, target=target_url, remark=remark))
    except ValidationError as e:
        logger.info('Invalid short URL update. Responding with 400.', extra={'shortcode': shortcode, 'event': INVALID_REQUEST})
        return response_400(message=str(e), error_code=INVALID_REQUEST)
    except ShortURLNotFoundError as e:
        logger.info('Short URL record not found. Responding with 404.', extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND})
        return response_404(message=str(e), error_code=SHORT_URL_NOT_FOUND)

    logger.info(
        'Admin updated short URL. Responding with 200.',
        extra={'shortcode': shortcode, 'username': session.username, 'event': URL_UPDATED},
    )
    return response_200(_short_url_json(short_url, event, services))


@guarantee_500_response
@login_required
def delete_url_handler(event: HandlerEvent, services: Services, session: SessionModel) -> HandlerResponse:
    shortcode = _path_shortcode(event)
    if shortcode is None:
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)

    try:
        services.short_urls.delete(shortcode)
    except ShortURLNotFoundError as e:
        logger.info('Short URL record not found. Responding with 404.', extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND})
        return response_404(message=str(e), error_code=SHORT_URL_NOT_FOUND)

    logger.info(
        'Admin deleted short URL. Responding with 200.',
        extra={'shortcode': shortcode, 'username': session.username, 'event': URL_DELETED},
    )
    return response_200({'message': f"Deleted short url '{shortcode}'", 'short_code': shortcode})
