from pathlib import Path
import os
from datetime import timedelta

# ─────────────────────────────────────────────────────────
# 基本
# ─────────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# 開発中は True、デプロイ時は False に
DEBUG = env_bool("DJANGO_DEBUG", True)

# ローカル開発用（カンマ区切りで上書き可）
ALLOWED_HOSTS = os.getenv("DJANGO_ALLOWED_HOSTS", "127.0.0.1,localhost,testserver").split(",")

SECRET_KEY = os.getenv(
    "DJANGO_SECRET_KEY",
    "django-insecure-change-this-in-production-please"
)

# ─────────────────────────────────────────────────────────
# アプリ
# ─────────────────────────────────────────────────────────
INSTALLED_APPS = [
    # ASGI（runserver を daphne に差し替える）
    "daphne",

    # Django標準
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    # 追加（API/認証/スキーマ/CORS/フィルタ/WebSocket）
    "rest_framework",
    "django_filters",
    "corsheaders",
    "drf_spectacular",
    "channels",

    # 自作アプリ
    "accounts",
    "marketplace",
    "chat",
]

# ─────────────────────────────────────────────────────────
# ミドルウェア（CORSはできるだけ先頭付近）
# ─────────────────────────────────────────────────────────
MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "campus_market.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "campus_market.wsgi.application"
ASGI_APPLICATION = "campus_market.asgi.application"

# ─────────────────────────────────────────────────────────
# DB（SQLiteで最速起動。PostgreSQLにするならここを差し替え）
# ─────────────────────────────────────────────────────────
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.getenv("DJANGO_DB_PATH", BASE_DIR / "db.sqlite3"),
        # WebSocket のテストは別スレッドから DB に触るのでファイルにしておく
        "TEST": {"NAME": BASE_DIR / "test_db.sqlite3"},
    }
}
# 例：PostgreSQL にする場合
# DATABASES = {
#     "default": {
#         "ENGINE": "django.db.backends.postgresql",
#         "NAME": os.getenv("POSTGRES_DB", "campus_market"),
#         "USER": os.getenv("POSTGRES_USER", "postgres"),
#         "PASSWORD": os.getenv("POSTGRES_PASSWORD", ""),
#         "HOST": os.getenv("POSTGRES_HOST", "localhost"),
#         "PORT": os.getenv("POSTGRES_PORT", "5432"),
#     }
# }

# ─────────────────────────────────────────────────────────
# パスワードバリデータ（デフォルト）
# ─────────────────────────────────────────────────────────
AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# ─────────────────────────────────────────────────────────
# i18n / tz
# ─────────────────────────────────────────────────────────
LANGUAGE_CODE = "ja"
TIME_ZONE = "Asia/Tokyo"
USE_I18N = True
USE_TZ = True  # DBはUTC、表示はAsia/TokyoでOK

# ─────────────────────────────────────────────────────────
# 静的ファイル（商品画像はURIで保持するのでメディアは使わない）
# ─────────────────────────────────────────────────────────
STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"  # collectstatic 用（本番）

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ─────────────────────────────────────────────────────────
# CORS（フロント別ドメイン想定・開発はゆるめ）
# ─────────────────────────────────────────────────────────
CORS_ALLOW_ALL_ORIGINS = DEBUG
CORS_ALLOWED_ORIGINS = [
    o for o in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",") if o
]

# ─────────────────────────────────────────────────────────
# DRF / JWT / OpenAPI
# ─────────────────────────────────────────────────────────
REST_FRAMEWORK = {
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework_simplejwt.authentication.JWTAuthentication",
        "rest_framework.authentication.SessionAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.IsAuthenticatedOrReadOnly",
    ),
    "DEFAULT_FILTER_BACKENDS": (
        "django_filters.rest_framework.DjangoFilterBackend",
        "rest_framework.filters.SearchFilter",
        "rest_framework.filters.OrderingFilter",
    ),
    "DEFAULT_PAGINATION_CLASS": "rest_framework.pagination.PageNumberPagination",
    "PAGE_SIZE": 20,
}

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(minutes=60),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=7),
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Campus Market API",
    "DESCRIPTION": "Campus marketplace API (Django + DRF + Channels)",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
}

# ─────────────────────────────────────────────────────────
# Channels（WebSocket）
# 単一プロセス前提。接続レジストリ（chat.registry）をプロセス内に持つので
# チャネルレイヤーは使わない（CHANNEL_LAYERS は未設定のまま）
# ─────────────────────────────────────────────────────────

# auth イベントの userId をセッション/JWT の本人と照合しない旧挙動に戻すか
CHAT_TRUST_CLIENT_IDENTITY = env_bool("CHAT_TRUST_CLIENT_IDENTITY", False)

# 受け渡し方法（order type）を選べるのは誰か: "seller" / "buyer" / "participant"
# 取引完了は常に出品者のみ
CHAT_ORDER_TYPE_ACTOR = os.getenv("CHAT_ORDER_TYPE_ACTOR", "seller")

# ─────────────────────────────────────────────────────────
# ログ
# ─────────────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        "chat": {
            "handlers": ["console"],
            "level": os.getenv("CHAT_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
