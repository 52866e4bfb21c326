"""
Gunicorn configuration for Feedback Insights production deployment.

Usage:
    gunicorn -c gunicorn.conf.py "app:create_app('production')"

Or with environment variable:
    GUNICORN_CMD_ARGS="--bind=0.0.0.0:8000" gunicorn "app:create_app('production')"

Rate limit counters live in each worker unless RATE_LIMIT_STORAGE_URI points
at shared storage (e.g. redis://).
"""
import os
import multiprocessing

# Server Socket
bind = os.environ.get("GUNICORN_BIND", "0.0.0.0:8000")
backlog = 2048

# Worker Processes
workers = int(os.environ.get("GUNICORN_WORKERS", multiprocessing.cpu_count() * 2 + 1))
worker_class = os.environ.get("GUNICORN_WORKER_CLASS", "sync")
max_requests = 1000
max_requests_jitter = 50
# Must exceed OPENAI_TIMEOUT_SECONDS so a slow classification is not killed mid-request
timeout = int(os.environ.get("GUNICORN_TIMEOUT", "90"))
graceful_timeout = 30
keepalive = 5

# Logging
errorlog = "-"  # stderr
accesslog = "-"  # stdout
loglevel = os.environ.get("GUNICORN_LOG_LEVEL", "info")
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# Process Naming
proc_name = "feedback-insights"


def when_ready(server):
    """Called just after the server is started."""
    server.log.info(f"Feedback Insights ready. Listening on {bind}")


def worker_exit(server, worker):
    """Called just after a worker has been exited."""
    server.log.info(f"Worker {worker.pid} exited")


# For Heroku/Railway deployment
if os.environ.get("PORT"):
    bind = f"0.0.0.0:{os.environ['PORT']}"

# For development, reduce workers
if os.environ.get("FLASK_ENV") == "development":
    workers = 2
    reload = True
    loglevel = "debug"
