# API Route Constants

# Base API
API_BASE = '/api'

# User routes
USER_BASE = f'{API_BASE}/user'
USER_CREATE = USER_BASE
USER_LOGIN = f'{USER_BASE}/login'
USER_LOGOUT = f'{USER_BASE}/logout'
USER_ME = f'{USER_BASE}/me'

# Session routes
SESSION_BASE = f'{API_BASE}/session'
SESSION_CREATE = SESSION_BASE
SESSION_LIST = SESSION_BASE
SESSION_LIST_ALL = f'{SESSION_BASE}/all'
SESSION_UPCOMING = f'{SESSION_BASE}/upcoming'
SESSION_COUNT = f'{SESSION_BASE}/count'
SESSION_GET = f'{SESSION_BASE}/{{session_id}}'
SESSION_UPDATE = f'{SESSION_BASE}/{{session_id}}'
SESSION_DELETE = f'{SESSION_BASE}/{{session_id}}'

# Booking routes
BOOKING_BASE = f'{API_BASE}/booking'
BOOKING_CREATE = BOOKING_BASE
BOOKING_LIST = BOOKING_BASE
BOOKING_ACTIVE = f'{BOOKING_BASE}/active'
BOOKING_GET = f'{BOOKING_BASE}/{{booking_id}}'
BOOKING_CANCEL = f'{BOOKING_BASE}/{{booking_id}}'

# System routes
HEALTH = '/health'
METRICS = '/metrics'
