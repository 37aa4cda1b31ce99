"""
ASGIエントリーポイント

uvicorn spahost.main:app --host 0.0.0.0 --port 8080
"""

from .core.app_factory import create_app
from .core.logging import get_request_logger
from .core.monitoring import init_monitoring

init_monitoring()

app = create_app(logger=get_request_logger())
