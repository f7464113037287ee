# contract_api/app/platform/logging.py
import os
import json
import logging
import logging.config
from contextvars import ContextVar
from datetime import datetime, timezone

# ===== Request ID =====
request_id_ctx = ContextVar("request_id", default="-")

class RequestIDFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get()
        return True

# logger.info(..., extra={...})로 넘기는 도메인 필드
DOMAIN_FIELDS = (
    "index", "hit_id", "vocabulary", "updated", "took_ms", "total", "export_format",
)

# uvicorn.access 레코드에 존재할 수 있는 필드
ACCESS_FIELDS = (
    "client_addr", "request_line", "status_code",
    "http_method", "http_version", "path", "query_string",
    "client_ip", "user_agent", "duration_ms", "scheme",
)

# ===== JSON Formatter =====
class JsonFormatter(logging.Formatter):
    """
    JSON 라인 출력: Logstash에서 바로 파싱 가능.
    검색/정정 로그의 도메인 필드와 access 필드를 있으면 함께 싣는다.
    """
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
        }

        # 예외 스택
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        for k in DOMAIN_FIELDS + ACCESS_FIELDS:
            v = getattr(record, k, None)
            if v is not None:
                payload[k] = v

        return json.dumps(payload, ensure_ascii=False)

# ===== Text Formatter (로컬 확인용) =====
TEXT_DEFAULT = "%(asctime)s %(levelname)s [%(name)s] [%(request_id)s] %(message)s"
TEXT_ACCESS = "%(asctime)s %(levelname)s [access] [%(request_id)s] %(message)s"

def _file_handler(filename: str, formatter: str, level: str) -> dict:
    return {
        "class": "logging.handlers.TimedRotatingFileHandler",
        "level": level,
        "formatter": formatter,
        "filename": filename,
        "when": "midnight",
        "backupCount": 14,
        "encoding": "utf-8",
        "filters": ["request_id"],
    }

def setup_logging(
    *,
    log_to_file: bool = False,
    log_dir: str = "/var/log/app",
    as_json: bool = True,
    level: str = "INFO",
) -> None:
    """
    - app 로그: root, uvicorn.error, opensearch
    - access 로그: uvicorn.access, app.access(RequestContextMiddleware)
    - 중복 방지: uvicorn.* 는 propagate=False
    """
    os.environ.setdefault("TZ", "UTC")

    app_fmt = "json" if as_json else "text_default"
    access_fmt = "json" if as_json else "text_access"

    handlers = {
        "console_app": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": app_fmt,
            "filters": ["request_id"],
        },
        "console_access": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": access_fmt,
            "filters": ["request_id"],
        },
    }
    app_handlers = ["console_app"]
    access_handlers = ["console_access"]

    if log_to_file:
        os.makedirs(log_dir, exist_ok=True)
        handlers["file_app"] = _file_handler(f"{log_dir}/app.log", app_fmt, level)
        handlers["file_access"] = _file_handler(f"{log_dir}/access.log", access_fmt, level)
        app_handlers.append("file_app")
        access_handlers.append("file_access")

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "request_id": {"()": RequestIDFilter}
        },
        "formatters": {
            "json": {"()": JsonFormatter},
            "text_default": {"format": TEXT_DEFAULT},
            "text_access": {"format": TEXT_ACCESS},
        },
        "handlers": handlers,
        "loggers": {
            "": {"handlers": app_handlers, "level": level, "propagate": False},
            "uvicorn.error": {"handlers": app_handlers, "level": level, "propagate": False},
            # opensearch-py는 요청마다 INFO를 남기므로 한 단계 올린다
            "opensearch": {"handlers": app_handlers, "level": "WARNING", "propagate": False},
            # 접근 로그는 별도 핸들러로 (access 지표 집계를 위해 분리)
            "uvicorn.access": {"handlers": access_handlers, "level": level, "propagate": False},
            "app.access": {"handlers": access_handlers, "level": level, "propagate": False},
        },
    })
