"""Fixed values shared across the SDK."""

DESKTOP_SERVER_NAME = "https://www.facebook.com"
MOBILE_SERVER_NAME = "https://m.facebook.com"
LOGIN_SUCCESS_PATH = "/connect/login_success.html"
API_8_OR_ABOVE = True

VERSION = "0.14.0"