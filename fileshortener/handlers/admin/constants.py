# Log event / error codes
INVALID_REQUEST = 'INVALID_REQUEST'
INVALID_CREDENTIALS = 'INVALID_CREDENTIALS'
LOGIN_SUCCESS = 'LOGIN_SUCCESS'
LOGOUT_SUCCESS = 'LOGOUT_SUCCESS'
SESSION_REQUIRED = 'SESSION_REQUIRED'
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
SHORTCODE_ALREADY_EXISTS = 'SHORTCODE_ALREADY_EXISTS'
URL_CREATED = 'URL_CREATED'
URL_UPDATED = 'URL_UPDATED'
URL_DELETED = 'URL_DELETED'
SHORTCODE_GENERATION_FAILED = 'SHORTCODE_GENERATION_FAILED'
