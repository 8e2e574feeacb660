"""
Package Default Values
All hardcoded values should be defined here and accessed via Config.get()
This file contains sensible defaults that can be overridden in config/session.py or .env
"""

# ============================================================================
# SESSION DEFAULTS
# ============================================================================

DEFAULT_SESSION_DRIVER = 'file'
DEFAULT_SESSION_LIFETIME = 1440  # seconds (24 minutes)
DEFAULT_SESSION_ID_LENGTH = 40
DEFAULT_SESSION_LOTTERY = [2, 100]  # [chances, out_of] for garbage collection
DEFAULT_SESSION_FILE_PREFIX = 'session_'

# Session ids may only contain these characters (filesystem and key safe)
SESSION_ID_PATTERN = r'^[A-Za-z0-9,\-_]+$'

# ============================================================================
# SECURITY POSTURE DEFAULTS
# ============================================================================

DEFAULT_WARN_INSECURE_SETTINGS = True
DEFAULT_USE_STRICT_MODE = True
DEFAULT_USE_COOKIES = True
DEFAULT_USE_ONLY_COOKIES = True
DEFAULT_USE_TRANS_SID = False

# ============================================================================
# CRYPTO DEFAULTS
# ============================================================================

DEFAULT_CIPHER = 'aes-256-gcm'
DEFAULT_SECRET_LENGTH = 32  # bytes
DEFAULT_KEY_LENGTH = 32  # bytes (AES-256)
DEFAULT_SALT_LENGTH = 16  # bytes
DEFAULT_NONCE_LENGTH = 12  # bytes (GCM standard nonce)
DEFAULT_KDF_INFO = b'secure-session encryption key'

# ============================================================================
# STORE DEFAULTS
# ============================================================================

DEFAULT_REDIS_URL = 'redis://localhost:6379/0'
DEFAULT_REDIS_PREFIX = 'secure_session:'
DEFAULT_DATABASE_URL = 'sqlite://storage/database/sessions.sqlite3'

# ============================================================================
# LOGGING DEFAULTS
# ============================================================================

DEFAULT_LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_LOG_BACKUP_COUNT = 5
