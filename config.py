import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./auth.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")

    # Token signing (keys themselves are per user)
    JWT_ISSUER = data.get("JWT_ISSUER", "auth-service")
    JWT_AUDIENCE = data.get("JWT_AUDIENCE", "auth-service-clients")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    JWT_ALLOWED_ALGORITHMS = data.get("JWT_ALLOWED_ALGORITHMS", ["HS256"])
    JWT_LEEWAY_SECONDS = int(data.get("JWT_LEEWAY_SECONDS", 0))
    ACCESS_TOKEN_TTL_SECONDS = int(data.get("ACCESS_TOKEN_TTL_SECONDS", 3600))
    REFRESH_TOKEN_TTL_SECONDS = int(data.get("REFRESH_TOKEN_TTL_SECONDS", 7 * 24 * 3600))
    RESET_PASSWORD_TOKEN_TTL_SECONDS = int(data.get("RESET_PASSWORD_TOKEN_TTL_SECONDS", 900))
    EMAIL_VERIFICATION_TOKEN_TTL_SECONDS = int(
        data.get("EMAIL_VERIFICATION_TOKEN_TTL_SECONDS", 24 * 3600)
    )

    # Account protection
    MAX_FAILED_LOGIN_ATTEMPTS = int(data.get("MAX_FAILED_LOGIN_ATTEMPTS", 5))
    LOCKOUT_DURATION_MINUTES = int(data.get("LOCKOUT_DURATION_MINUTES", 30))
    RENEWAL_CODE_TTL_MINUTES = int(data.get("RENEWAL_CODE_TTL_MINUTES", 60))
    MAX_RENEWAL_CODE_ATTEMPTS = int(data.get("MAX_RENEWAL_CODE_ATTEMPTS", 5))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
