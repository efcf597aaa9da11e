import os

# Bind & workers
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = 1
# Signup calls wait on the fraud API; keep above FRAUD_PROTECTION_TIMEOUT
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr (collected by Docker)
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Caller IP is resolved by ProxyFix in the app
forwarded_allow_ips = "*"
proxy_protocol = False

wsgi_app = "storefront:create_app()"
