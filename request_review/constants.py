"""
Константы сервиса проверки заявок на регистрацию.
Централизованное хранение путей API, текстов уведомлений и лимитов.
"""

# ============= Backend Endpoints =============
# Пути относительно REVIEW_API_BASE_URL
ENDPOINT_REGISTER_REQUESTS = "user/register_requests"
ENDPOINT_PROCESS_REQUEST = "user/process_request"
ENDPOINT_SUBMIT_REQUEST = "user/register_request"

AUTH_COOKIE_NAME = "auth_token"  # Cookie, которую ожидает backend

# ============= HTTP Client Limits =============
HTTP_DEFAULT_TIMEOUT = 30.0  # Таймаут HTTP запросов по умолчанию (секунды)
HTTP_MAX_CONNECTIONS = 20  # Максимум одновременных HTTP соединений
HTTP_MAX_KEEPALIVE = 5  # Максимум keep-alive соединений

# ============= Notification Events =============
EVENT_REQUESTS_LOADED = "requests.loaded"
EVENT_REQUESTS_LOAD_FAILED = "requests.load_failed"
EVENT_REQUEST_APPROVED = "request.approved"
EVENT_REQUEST_REJECTED = "request.rejected"
EVENT_REQUEST_FAILED = "request.failed"
EVENT_REQUEST_SUBMITTED = "request.submitted"

# ============= Notification Texts =============
MESSAGE_APPROVED = "Request approved!"
MESSAGE_REJECTED = "Request rejected!"
MESSAGE_SUBMITTED = "Request submitted!"

LEVEL_INFO = "info"
LEVEL_ERROR = "error"

# ============= Log Sizes =============
NOTIFICATION_MAX_LOG_SIZE = 1000  # Максимальный размер лога уведомлений
APPLICATION_LOG_MAX_SIZE = 5000  # Максимальный размер лога приложения
PAGE_NOTIFICATIONS_LIMIT = 5  # Сколько последних уведомлений показывать на странице
