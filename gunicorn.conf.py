# gunicorn -c gunicorn.conf.py app.main:app
import os

bind = f"0.0.0.0:{os.getenv('PORT', 8000)}"
workers = int(os.getenv("WEB_CONCURRENCY", 2))
worker_class = "uvicorn.workers.UvicornWorker"
timeout = int(os.getenv("GUNICORN_TIMEOUT", 30))
graceful_timeout = 20
loglevel = os.getenv("LOG_LEVEL", "info").lower()
accesslog = "-"
# Workers open their own cached engine on first request; nothing is shared across fork
preload_app = False
