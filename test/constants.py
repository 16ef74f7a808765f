# Test Utility Constants

# Test Passwords (upper + lower + digit, 8+ chars)
DEFAULT_PASSWORD = 'Passw0rdOk'

# Test Emails
TEST_USER_EMAIL = 'user@test.com'
ANOTHER_USER_EMAIL = 'another_user@test.com'
ADMIN_EMAIL = 'admin@test.com'

# Test Names
TEST_USER_NAME = 'Test User'
ANOTHER_USER_NAME = 'Another User'
ADMIN_NAME = 'Test Admin'

# Session test constants
DEFAULT_LOCATION = 'Salle 204, 12 rue des Ecoles'
DEFAULT_LANGUAGE = 'Anglais'
DEFAULT_TIME = '09:30'
