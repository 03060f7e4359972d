# Log event / error codes
UNAUTHORIZED = 'UNAUTHORIZED'
INVALID_REQUEST_BODY = 'INVALID_REQUEST_BODY'
MISSING_TARGET_URL = 'MISSING_TARGET_URL'
SHORTCODE_ALREADY_EXISTS = 'SHORTCODE_ALREADY_EXISTS'
SHORTCODE_GENERATION_FAILED = 'SHORTCODE_GENERATION_FAILED'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'

BASIC_AUTH_REALM = 'Authorization Required'
